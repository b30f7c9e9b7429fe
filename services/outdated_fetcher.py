# FILE: services/outdated_fetcher.py

import enum
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from models.dependency import MAJOR_MARKER, OutdatedEntry, is_major_update
from services.host import Host
from services.npm_service import NpmService
from services.settings_service import Settings

logger = logging.getLogger(__name__)

CHECKING_STATUS = "Node.js Updater: Checking for outdated dependencies..."


class OutdatedOutputError(ValueError):
    """Raised when `npm outdated --json` output cannot be understood."""


class FetchStatus(enum.Enum):
    SKIPPED = "skipped"
    EMPTY = "empty"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class FetchResult:
    status: FetchStatus
    entries: list[OutdatedEntry] = field(default_factory=list)


def _is_blank_report(stdout: str) -> bool:
    text = stdout.strip()
    return not text or text == "{}"


def parse_outdated_output(stdout: str) -> list[OutdatedEntry]:
    """
    Parses the JSON object printed by `npm outdated --json`.
    Keys are package names; each value needs string `wanted` and `latest`
    fields. `current` is missing for declared-but-uninstalled packages.
    """
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise OutdatedOutputError(str(e)) from e

    if not isinstance(data, dict):
        raise OutdatedOutputError(f"expected a JSON object, got {type(data).__name__}")

    entries = []
    for name, info in data.items():
        if not isinstance(info, dict):
            raise OutdatedOutputError(f"entry for '{name}' is not an object")
        wanted, latest = info.get('wanted'), info.get('latest')
        if not isinstance(wanted, str) or not isinstance(latest, str):
            raise OutdatedOutputError(f"entry for '{name}' lacks 'wanted'/'latest' versions")
        current = info.get('current')
        entries.append(OutdatedEntry(
            name=name,
            current=current if isinstance(current, str) else "",
            wanted=wanted,
            latest=latest,
        ))
    return entries


class OutdatedFetcher:
    """Runs `npm outdated` for a project and turns its output into entries."""

    def __init__(self, host: Host, npm: NpmService, settings: Settings | None = None):
        self.host = host
        self.npm = npm
        self.settings = settings or Settings()

    def _check_project(self, project_root: Path | None) -> bool:
        if project_root is None:
            self.host.show_info("Open a Node.js project to check outdated dependencies.")
            return False
        if not (project_root / self.settings.manifest_name).exists():
            self.host.show_info(f"No {self.settings.manifest_name} found in workspace.")
            return False
        if not (project_root / self.settings.modules_dir).exists():
            self.host.show_warning("Run `npm install` before checking outdated packages.")
            return False
        return True

    async def fetch_outdated(self, project_root: Path | None) -> FetchResult:
        if not self._check_project(project_root):
            return FetchResult(FetchStatus.SKIPPED)

        self.host.set_status(CHECKING_STATUS)
        try:
            result = await self.npm.outdated(project_root)
        finally:
            self.host.set_status("")

        # npm outdated exits 1 whenever something is outdated, so stdout decides.
        if not result.ok and not result.stdout.strip():
            message = "npm outdated failed. Make sure Node.js is installed."
            if result.stderr.strip():
                message += f" {result.stderr.strip()}"
            self.host.show_error(message)
            return FetchResult(FetchStatus.ERROR)

        if _is_blank_report(result.stdout):
            self.host.show_info("Nothing to update — All dependencies are up-to-date 🎉")
            return FetchResult(FetchStatus.EMPTY)

        try:
            entries = parse_outdated_output(result.stdout)
        except OutdatedOutputError as e:
            self.host.show_error(f"Failed to parse npm outdated output. {e}")
            return FetchResult(FetchStatus.ERROR)

        major = [e.name for e in entries if is_major_update(e.wanted, e.latest)]
        if major:
            self.host.show_info(f"{MAJOR_MARKER} Major updates available for: {', '.join(major)}.")

        logger.info("Found %d outdated package(s) in %s", len(entries), project_root)
        return FetchResult(FetchStatus.SUCCESS, entries)

    async def fetch_outdated_names(self, project_root: Path | None) -> list[str] | None:
        """
        Quiet variant used to refresh the name list only.
        Returns None when npm failed or printed something unparsable.
        """
        if project_root is None:
            return []

        result = await self.npm.outdated(project_root)
        if not result.ok and not result.stdout.strip():
            logger.warning("npm outdated failed in %s: %s", project_root, result.diagnostic)
            return None
        if _is_blank_report(result.stdout):
            return []
        try:
            return [entry.name for entry in parse_outdated_output(result.stdout)]
        except OutdatedOutputError as e:
            logger.warning("Could not parse npm outdated output: %s", e)
            return None
