# FILE: services/update_executor.py

import logging
from pathlib import Path

from services.dependency_report import DependencyReport
from services.host import Host
from services.npm_service import NpmService
from services.settings_service import Settings

logger = logging.getLogger(__name__)

CONFIRM_UPDATE_ALL = "Are you sure you want to update all outdated dependencies to their latest versions?"
ACCEPT_UPDATE_ALL = "Yes, Update All"

HELP_TEXT = (
    "ℹ️ Help:\n"
    "- Installed: Version in node_modules\n"
    "- Wanted: Matches version range in package.json\n"
    "- Latest: Most recent version on npm\n"
    "⚠️ Major updates may include breaking changes."
)


class UpdateExecutor:
    """Runs `npm install <name>@latest` for one or every outdated package."""

    def __init__(self, host: Host, npm: NpmService, report: DependencyReport,
                 settings: Settings | None = None):
        self.host = host
        self.npm = npm
        self.report = report
        self.settings = settings or Settings()

    async def update_one(self, name: str | None, project_root: Path | None) -> bool:
        if not name or project_root is None:
            self.host.show_error("No dependency selected or no workspace open.")
            return False

        self.host.show_info(f"Updating {name} to latest...")
        self.host.set_status(f"Updating {name} to latest...")
        try:
            result = await self.npm.install_latest([name], project_root)
        finally:
            self.host.set_status("")

        if not result.ok:
            logger.error("npm install %s@latest failed: %s", name, result.diagnostic)
            self.host.show_error(f"Failed to update {name}: {result.diagnostic}")
            return False

        self.host.show_info(f"{name} updated to latest.")
        self.report.refresh()
        return True

    async def update_all(self, project_root: Path | None) -> bool:
        if project_root is None:
            self.host.show_error("No workspace folder open.")
            return False

        # Re-list first so the retained names match what npm reports now.
        await self.report.list_dependencies(project_root)
        names = self.report.outdated_names
        if not names:
            self.host.show_info("[Manual Update All] No outdated dependencies found.")
            return False

        if not self.host.confirm(CONFIRM_UPDATE_ALL, ACCEPT_UPDATE_ALL):
            self.host.show_info("Update cancelled.")
            return False

        self.host.set_status("Node.js Updater: Updating all dependencies...")
        try:
            result = await self.npm.install_latest(names, project_root)
        finally:
            self.host.set_status("")

        if not result.ok:
            logger.error("Batch npm install failed: %s", result.diagnostic)
            self.host.show_error(f"Failed to update all dependencies: {result.diagnostic}")
            return False

        logger.info("Updated %d package(s): %s", len(names), ", ".join(names))
        self.host.show_info("✅ All dependencies updated successfully.")
        self.report.refresh()
        return True

    def open_package_page(self, name: str):
        self.host.open_external(self.settings.package_url(name))

    def show_help(self):
        self.host.show_info(HELP_TEXT)
