# FILE: models/dependency_gobject.py

import gi
gi.require_version('Gtk', '4.0')
from gi.repository import GObject

from models.dependency import Dependency

class DependencyGObject(GObject.Object):
    __gtype_name__ = "DependencyGObject"
    """
    A GObject wrapper for the Dependency dataclass so it can live in a
    Gio.ListStore and be bound by the list item factories.
    """

    def __init__(self, dep: Dependency):
        super().__init__()
        self._dep = dep

    # Read-only properties backed by the wrapped record
    @GObject.Property(type=str, nick='Package Name')
    def name(self):
        return self._dep.name

    @GObject.Property(type=str, nick='Label')
    def label(self):
        return self._dep.label

    @GObject.Property(type=str, nick='Description')
    def description(self):
        return self._dep.description

    @GObject.Property(type=str, nick='Tooltip')
    def tooltip(self):
        return self._dep.tooltip

    @GObject.Property(type=bool, default=False, nick='Is Major Update')
    def is_major_update(self):
        return self._dep.is_major_update

    def get_dependency(self) -> Dependency:
        return self._dep
