# FILE: services/dependency_report.py

import enum
import logging
from pathlib import Path
from typing import Callable

from models.dependency import Dependency
from services.host import Host
from services.outdated_fetcher import FetchStatus, OutdatedFetcher

logger = logging.getLogger(__name__)


class ReportState(enum.Enum):
    IDLE = "idle"
    CHECKING = "checking"
    EMPTY = "empty"
    SUCCESS = "success"
    ERROR = "error"


_OUTCOMES = {
    FetchStatus.EMPTY: ReportState.EMPTY,
    FetchStatus.SUCCESS: ReportState.SUCCESS,
    FetchStatus.ERROR: ReportState.ERROR,
}


class DependencyReport:
    """
    Builds the list of outdated dependencies for the open project and keeps
    the names from the last successful check for "update all".

    Nothing here is locked: overlapping refreshes each overwrite the name
    list when they finish, the last one wins.
    """

    def __init__(self, host: Host, fetcher: OutdatedFetcher):
        self.host = host
        self.fetcher = fetcher
        self.state = ReportState.IDLE
        self.last_state = ReportState.IDLE
        self._outdated_names: list[str] = []
        self._listeners: list[Callable[[], None]] = []

    @property
    def outdated_names(self) -> list[str]:
        return list(self._outdated_names)

    # --- Change notifications ---
    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Registers a listener; returns a function that removes it again."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def refresh(self):
        """Tells every listener the list is stale so they ask for it again."""
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("Dependency list listener %r failed", callback)

    # --- Listing ---
    async def list_dependencies(self, project_root: Path | None = None) -> list[Dependency]:
        """Lists `project_root`, or the host's open project when not given."""
        if project_root is None:
            project_root = self.host.project_root()
        if project_root is None:
            self.host.show_info("Open a Node.js project to check outdated dependencies.")
            return []

        self.state = ReportState.CHECKING
        try:
            result = await self.fetcher.fetch_outdated(project_root)
        finally:
            self.state = ReportState.IDLE

        if result.status is FetchStatus.SKIPPED:
            return []
        self.last_state = _OUTCOMES[result.status]

        if result.status is FetchStatus.EMPTY:
            self._outdated_names = []
            return []
        if result.status is FetchStatus.ERROR:
            return []

        dependencies = [Dependency.from_entry(entry) for entry in result.entries]
        self._outdated_names = [dep.name for dep in dependencies]
        return dependencies

    async def refresh_outdated_names(self) -> list[str]:
        """Re-reads just the outdated names, keeping the old list if npm fails."""
        names = await self.fetcher.fetch_outdated_names(self.host.project_root())
        if names is not None:
            self._outdated_names = names
        return self.outdated_names
