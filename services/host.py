# FILE: services/host.py

from pathlib import Path
from typing import Protocol


class Host(Protocol):
    """
    What the updater needs from the surface it runs in: a project root,
    three kinds of notices, a blocking yes/no prompt, a status line and a
    way to open links. The GTK adapter lives in services/app_logic.py.
    """

    def project_root(self) -> Path | None: ...

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def confirm(self, message: str, accept_label: str) -> bool:
        """Blocks until the user answers; True only for the accept button."""
        ...

    def set_status(self, message: str) -> None: ...

    def open_external(self, url: str) -> None: ...
