#!/usr/bin/env python3

# FILE: npm_updater.py

import logging
import sys
from pathlib import Path

import gi
gi.require_version('Gtk', '4.0')
from gi.repository import Gtk, Gio, GLib

from services.settings_service import load_settings
from ui.window import NpmUpdaterWindow

class NpmUpdaterApp(Gtk.Application):
    """The main GTK Application class."""
    def __init__(self, project_root: Path | None, settings, *args, **kwargs):
        super().__init__(*args, application_id="io.github.npmupdater", flags=Gio.ApplicationFlags.NON_UNIQUE, **kwargs)
        self.project_root = project_root
        self.settings = settings
        self.window = None

    def do_activate(self):
        """Called when the application is activated."""
        if not self.window:
            self.window = NpmUpdaterWindow(application=self, project_root=self.project_root,
                                           settings=self.settings)
        self.window.present()

def _gtk_log_handler(domain, level, message):
    if "GtkText - did not receive a focus-out event." in message:
        return # Suppress this specific warning
    GLib.log_default_handler(domain, level, message)

def _project_root_from_args(argv: list[str]) -> Path | None:
    root = Path(argv[1]) if len(argv) > 1 else Path.cwd()
    root = root.expanduser().resolve()
    return root if root.is_dir() else None

def main(argv=None) -> int:
    argv = list(sys.argv if argv is None else argv)
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GLib.log_set_handler("Gtk", GLib.LogLevelFlags.LEVEL_WARNING, _gtk_log_handler)

    project_root = _project_root_from_args(argv)
    logging.getLogger(__name__).info("Starting Node.js Updater for %s", project_root)

    app = NpmUpdaterApp(project_root, settings)
    # The project path is ours, not GApplication's
    return app.run(argv[:1])

if __name__ == "__main__":
    sys.exit(main())
