"""Data models for the Garden Tracker integration.

This file defines the saved layouts the integration keeps in storage. The
decoded garden models live in the codec; a saved layout adds the watering
state tracked on top of its save code.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime


def _rename_legacy_keys(data: dict, mapping: dict[str, str]) -> dict:
    """Return a copy of data with legacy keys renamed."""
    data = data.copy()  # Don't modify original
    for old, new in mapping.items():
        if old in data and new not in data:
            data[new] = data.pop(old)
    return data


@dataclass
class SavedLayout:
    """A garden layout tracked by the integration.

    Attributes:
        id: A unique identifier for the layout.
        name: The display name of the layout.
        save_code: The current-format save code of the layout.
        original_version: Version tag the layout was imported with.
        source_url: The planner URL the layout was imported from, if any.
        created_at: ISO timestamp of the import.
        last_modified: ISO timestamp of the last change.
        notes: Free-form notes.
        tags: Free-form tags.
        watered: Per-tile watering state, row-major; True once watered.
        last_reset_cycle: Palia cycle id of the last daily watering reset.
    """

    id: str
    name: str
    save_code: str
    original_version: str | None = None
    source_url: str | None = None
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    last_modified: str = field(default_factory=lambda: datetime.now().isoformat())
    notes: str = ""
    tags: list[str] = field(default_factory=list)
    watered: list[list[bool]] = field(default_factory=list)
    last_reset_cycle: str | None = None

    def to_dict(self) -> dict:
        """Convert the layout to a dictionary."""
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> SavedLayout:
        """Create a SavedLayout from a dictionary.

        Migrates the browser tracker's field names and drops unknown keys,
        so layouts stored by older versions still load.
        """
        data = _rename_legacy_keys(
            data,
            {
                "saveCode": "save_code",
                "createdAt": "created_at",
                "lastModified": "last_modified",
                "originalLayoutUrl": "source_url",
            },
        )
        allowed_keys = {f.name for f in fields(SavedLayout)}
        return SavedLayout(**{k: v for k, v in data.items() if k in allowed_keys})
