# FILE: services/app_logic.py

import asyncio
import logging
import threading
from pathlib import Path

from gi.repository import GLib

from models.dependency import Dependency
from services.dependency_report import DependencyReport
from services.npm_service import NpmService
from services.outdated_fetcher import OutdatedFetcher
from services.settings_service import Settings
from services.update_executor import UpdateExecutor

logger = logging.getLogger(__name__)


class AppLogic:
    """
    Runs the updater for the GTK window and acts as its Host.
    Work happens on daemon threads, each with its own asyncio loop; anything
    that touches the UI goes through the callbacks dict via GLib.idle_add.
    """
    def __init__(self, callbacks: dict, project_root: Path | None, settings: Settings):
        self.callbacks = callbacks
        self.callbacks.setdefault('set_status', lambda text: None)
        self._project_root = project_root
        self.settings = settings

        self.npm = NpmService(settings.npm_command)
        self.fetcher = OutdatedFetcher(self, self.npm, settings)
        self.report = DependencyReport(self, self.fetcher)
        self.executor = UpdateExecutor(self, self.npm, self.report, settings)
        self.report.subscribe(self.load_dependencies)

    # --- Host interface ---
    def project_root(self) -> Path | None:
        return self._project_root

    def show_info(self, message: str):
        logger.info(message)
        GLib.idle_add(self.callbacks['log_output'], message, False)

    def show_warning(self, message: str):
        logger.warning(message)
        GLib.idle_add(self.callbacks['log_output'], f"Warning: {message}", False)

    def show_error(self, message: str):
        logger.error(message)
        GLib.idle_add(self.callbacks['log_output'], f"Error: {message}", False)
        GLib.idle_add(self.callbacks['show_error_dialog'], message)

    def set_status(self, message: str):
        GLib.idle_add(self.callbacks['set_status'], message)

    def open_external(self, url: str):
        GLib.idle_add(self.callbacks['open_uri'], url)

    def confirm(self, message: str, accept_label: str) -> bool:
        """Asks on the main loop and blocks the calling worker until answered."""
        if threading.current_thread() is threading.main_thread():
            raise RuntimeError("confirm() must be called from a worker thread")

        answered = threading.Event()
        answer = {'accepted': False}

        def on_response(accepted: bool):
            answer['accepted'] = accepted
            answered.set()

        GLib.idle_add(self.callbacks['ask_confirmation'], message, accept_label, on_response)
        answered.wait()
        return answer['accepted']

    # --- Public methods (called by the UI) ---
    def load_dependencies(self):
        GLib.idle_add(self.callbacks['log_output'], "Checking for outdated dependencies", True)
        self._run_in_background(self._load_worker())

    def refresh(self):
        self.show_info("Refreshing Node.js outdated dependencies...")
        self.report.refresh()

    def update_dependency(self, name: str | None):
        self._run_in_background(self.executor.update_one(name, self._project_root))

    def update_all_dependencies(self):
        GLib.idle_add(self.callbacks['log_output'], "Update all dependencies", True)
        self._run_in_background(self.executor.update_all(self._project_root))

    def open_package_page(self, name: str):
        self.executor.open_package_page(name)

    def show_help(self):
        self.executor.show_help()

    # --- Internal workers ---
    async def _load_worker(self):
        dependencies: list[Dependency] = await self.report.list_dependencies()
        GLib.idle_add(self.callbacks['update_dependency_list'], dependencies)
        if dependencies:
            self.show_info(f"Found {len(dependencies)} outdated package(s).")

    def _run_in_background(self, coro):
        def worker():
            try:
                asyncio.run(coro)
            except Exception as e:
                logger.exception("Background operation failed")
                GLib.idle_add(self.callbacks['log_output'], f"An unexpected error occurred: {e}", False)

        threading.Thread(target=worker, daemon=True).start()
