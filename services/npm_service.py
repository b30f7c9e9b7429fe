# FILE: services/npm_service.py

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Best available error text: stderr, then stdout, then the exit code."""
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"exit code {self.returncode}"


class NpmService:
    """A service class to handle all subprocess calls to npm."""

    def __init__(self, executable: str = "npm"):
        self.executable = executable

    async def run(self, *args: str, cwd: Path) -> CommandResult:
        """Runs `npm <args>` in `cwd` and collects both streams."""
        command_list = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(command_list), cwd)
        try:
            process = await asyncio.create_subprocess_exec(
                *command_list,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(cwd),
            )
            stdout, stderr = await process.communicate()
        except FileNotFoundError:
            err_msg = f"FATAL ERROR: '{self.executable}' command not found. Is Node.js installed and in your PATH?"
            logger.error(err_msg)
            return CommandResult(-1, "", err_msg)
        except OSError as e:
            err_msg = f"Could not start '{self.executable}': {e}"
            logger.error(err_msg)
            return CommandResult(-1, "", err_msg)

        result = CommandResult(
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )
        logger.debug("%s exited with %s", " ".join(command_list), result.returncode)
        return result

    async def outdated(self, cwd: Path) -> CommandResult:
        return await self.run("outdated", "--json", cwd=cwd)

    async def install_latest(self, names: list[str], cwd: Path) -> CommandResult:
        """Installs every name at @latest with a single `npm install`."""
        return await self.run("install", *(f"{name}@latest" for name in names), cwd=cwd)
