# Blender add-on to track renamed slicer presets.
# Copyright (C) 2025 Jack
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

# <pep8 compliant>

"""
Preset types and the rename record stored in the history.

The string tokens written to ``rename_history.json`` live here so the
mapping between :class:`PresetType` and its on-disk form is defined once.
"""

from __future__ import annotations

import enum
import math
from typing import NamedTuple

# On-disk token for any type that cannot be stored.
UNKNOWN_TOKEN = "unknown"


class PresetType(enum.Enum):
    """Kind of slicer preset a name belongs to.

    ``INVALID`` is a sentinel: it is never stored in a record, and unknown
    tokens read from disk map to it so the owning record gets dropped.
    """

    INVALID = "invalid"
    PRINTER = "printer"
    FILAMENT = "filament"

    @property
    def label(self) -> str:
        """Human-readable name shown in dialogs and panels."""
        return _LABELS[self]

    def to_token(self) -> str:
        """Return the token written to the history file."""
        if self is PresetType.INVALID:
            return UNKNOWN_TOKEN
        return self.value

    @classmethod
    def from_token(cls, token) -> PresetType:
        """Parse a history file token. Anything unrecognised is ``INVALID``."""
        if token == cls.PRINTER.value:
            return cls.PRINTER
        if token == cls.FILAMENT.value:
            return cls.FILAMENT
        return cls.INVALID


_LABELS = {
    PresetType.INVALID: "Preset",
    PresetType.PRINTER: "Printer",
    PresetType.FILAMENT: "Material",
}

# Items for ``bpy.props.EnumProperty`` wherever a preset type is chosen.
PRESET_TYPE_ITEMS = [
    ("PRINTER", "Printer", "Printer preset"),
    ("FILAMENT", "Material", "Filament (material) preset"),
]


class RenameRecord(NamedTuple):
    """One rename event: *old_name* became *new_name*."""

    preset_type: PresetType
    old_name: str
    new_name: str
    timestamp: int = 0  # Seconds since epoch. Not used for ordering.

    def is_valid(self) -> bool:
        return (
            self.preset_type is not PresetType.INVALID
            and bool(self.old_name)
            and bool(self.new_name)
            and self.old_name != self.new_name
        )

    def to_json(self) -> dict:
        return {
            "type": self.preset_type.to_token(),
            "old": self.old_name,
            "new": self.new_name,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_json(cls, item) -> RenameRecord | None:
        """Build a record from one element of the ``entries`` array.

        :return: The record, or ``None`` if *item* is malformed or breaks the
            record invariant.
        """
        if not isinstance(item, dict):
            return None
        old_name = item.get("old", "")
        new_name = item.get("new", "")
        if not isinstance(old_name, str) or not isinstance(new_name, str):
            return None
        timestamp = item.get("timestamp", 0)
        # bool is an int subclass but never a timestamp.
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        # json.load accepts NaN and Infinity, which have no integer value.
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            return None
        record = cls(
            preset_type=PresetType.from_token(item.get("type", "")),
            old_name=old_name,
            new_name=new_name,
            timestamp=int(timestamp),
        )
        return record if record.is_valid() else None
