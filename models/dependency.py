# FILE: models/dependency.py

from dataclasses import dataclass, field

MAJOR_MARKER = "⚠️"


def is_major_update(wanted: str, latest: str) -> bool:
    """True when the leading dot-segment of `latest` differs from `wanted`'s.

    Segments are compared as plain strings, so "10" and "010" differ and
    malformed versions are compared as-is.
    """
    return latest.split(".")[0] != wanted.split(".")[0]


@dataclass(frozen=True)
class OutdatedEntry:
    """One package as reported by `npm outdated --json`."""
    name: str
    current: str
    wanted: str
    latest: str


@dataclass(frozen=True)
class Dependency:
    """An outdated dependency as shown in the list."""
    name: str
    current_version: str
    wanted_version: str
    latest_version: str
    # Always derived from wanted vs latest, never passed in
    is_major_update: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "is_major_update",
                           is_major_update(self.wanted_version, self.latest_version))

    @classmethod
    def from_entry(cls, entry: OutdatedEntry) -> "Dependency":
        return cls(
            name=entry.name,
            current_version=entry.current,
            wanted_version=entry.wanted,
            latest_version=entry.latest,
        )

    @property
    def label(self) -> str:
        if self.is_major_update:
            return f"{MAJOR_MARKER} {self.name}"
        return self.name

    @property
    def description(self) -> str:
        text = (f"Installed: {self.current_version} → Wanted: {self.wanted_version}, "
                f"Latest: {self.latest_version}")
        if self.is_major_update:
            text += f" {MAJOR_MARKER} Major update!"
        return text

    @property
    def tooltip(self) -> str:
        lines = [
            f"Installed: {self.current_version}",
            f"Wanted (package.json): {self.wanted_version}",
            f"Latest (npm registry): {self.latest_version}",
        ]
        if self.is_major_update:
            lines.append(f"{MAJOR_MARKER} Major update available")
        return "\n".join(lines)
