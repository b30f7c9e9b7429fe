"""Shared fakes: a recording host and a scripted npm."""

from pathlib import Path

import pytest

from services.dependency_report import DependencyReport
from services.npm_service import CommandResult, NpmService
from services.outdated_fetcher import OutdatedFetcher
from services.update_executor import UpdateExecutor


class FakeHost:
    """Records every notice; answers confirmations with a preset choice."""

    def __init__(self, root: Path | None = None, confirm_answer: bool = True):
        self.root = root
        self.confirm_answer = confirm_answer
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.statuses: list[str] = []
        self.confirmations: list[tuple[str, str]] = []
        self.opened: list[str] = []

    def project_root(self) -> Path | None:
        return self.root

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def confirm(self, message: str, accept_label: str) -> bool:
        self.confirmations.append((message, accept_label))
        return self.confirm_answer

    def set_status(self, message: str) -> None:
        self.statuses.append(message)

    def open_external(self, url: str) -> None:
        self.opened.append(url)


class FakeNpm(NpmService):
    """Returns queued results per subcommand instead of spawning npm."""

    def __init__(self):
        super().__init__("npm")
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self.results: dict[str, list[CommandResult]] = {"outdated": [], "install": []}

    def queue(self, subcommand: str, returncode: int = 0, stdout: str = "", stderr: str = ""):
        self.results[subcommand].append(CommandResult(returncode, stdout, stderr))

    async def run(self, *args: str, cwd: Path) -> CommandResult:
        self.calls.append((args, cwd))
        pending = self.results[args[0]]
        return pending.pop(0) if pending else CommandResult(0, "", "")

    def calls_for(self, subcommand: str) -> list[tuple[str, ...]]:
        return [args for args, _ in self.calls if args[0] == subcommand]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text('{"name": "demo"}')
    (tmp_path / "node_modules").mkdir()
    return tmp_path


@pytest.fixture
def make_host():
    return FakeHost


@pytest.fixture
def host(project: Path) -> FakeHost:
    return FakeHost(project)


@pytest.fixture
def npm() -> FakeNpm:
    return FakeNpm()


@pytest.fixture
def fetcher(host: FakeHost, npm: FakeNpm) -> OutdatedFetcher:
    return OutdatedFetcher(host, npm)


@pytest.fixture
def report(host: FakeHost, fetcher: OutdatedFetcher) -> DependencyReport:
    return DependencyReport(host, fetcher)


@pytest.fixture
def executor(host: FakeHost, npm: FakeNpm, report: DependencyReport) -> UpdateExecutor:
    return UpdateExecutor(host, npm, report)
