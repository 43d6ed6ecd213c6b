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
Follow chains of renames to the current name of a preset.

A name is resolved by repeatedly looking up the most recently recorded
rename away from it.  Two guards keep this bounded:

- a per-call set of visited names stops at the first repeated name, so
  ``A -> B -> A`` terminates instead of looping;
- a hop limit (``max_depth``) stops pathological chains.

The lookup itself is pluggable.  :class:`RenameIndex` answers it in
constant time; :func:`find_latest` is the plain backward scan and gives the
same answers.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Tuple

from ..common.constants import DEFAULT_MAX_RESOLVE_DEPTH
from .types import PresetType, RenameRecord

#: ``(preset_type, old_name) -> new_name or None``
Lookup = Callable[[PresetType, str], Optional[str]]


def find_latest(
    records: Sequence[RenameRecord],
    preset_type: PresetType,
    old_name: str,
) -> RenameRecord | None:
    """Return the last inserted record renaming *old_name* away, if any."""
    for record in reversed(records):
        if record.preset_type is preset_type and record.old_name == old_name:
            return record
    return None


class RenameIndex:
    """Position of the latest record for every ``(type, old_name)`` pair.

    Kept in step with the record list by calling :meth:`add` after every
    append, or :meth:`rebuild` after replacing the list wholesale.
    """

    def __init__(self) -> None:
        self._latest: Dict[Tuple[PresetType, str], int] = {}
        self._records: Sequence[RenameRecord] = ()

    def __len__(self) -> int:
        return len(self._latest)

    def clear(self) -> None:
        self._latest.clear()
        self._records = ()

    def rebuild(self, records: Sequence[RenameRecord]) -> None:
        self._latest.clear()
        self._records = records
        for position, record in enumerate(records):
            self._latest[(record.preset_type, record.old_name)] = position

    def add(self, records: Sequence[RenameRecord], position: int) -> None:
        """Register the record that was just stored at *position*."""
        self._records = records
        record = records[position]
        self._latest[(record.preset_type, record.old_name)] = position

    def lookup(self, preset_type: PresetType, old_name: str) -> str | None:
        position = self._latest.get((preset_type, old_name))
        if position is None:
            return None
        return self._records[position].new_name


def scan_lookup(records: Sequence[RenameRecord]) -> Lookup:
    """Build a lookup that scans *records* backwards on every call."""
    def lookup(preset_type: PresetType, old_name: str) -> str | None:
        record = find_latest(records, preset_type, old_name)
        return record.new_name if record is not None else None
    return lookup


def resolve_name(
    lookup: Lookup,
    preset_type: PresetType,
    name: str,
    max_depth: int = DEFAULT_MAX_RESOLVE_DEPTH,
) -> str | None:
    """Resolve *name* to the current name of the preset.

    :param lookup: Returns the newest ``new_name`` recorded for a
        ``(type, old_name)`` pair, or ``None``.
    :param preset_type: Type the name belongs to. Renames of other types are
        never followed.
    :param name: Name as stored in a project or setting.
    :param max_depth: Maximum number of renames to follow.
    :return: The current name when it differs from *name*, otherwise
        ``None``.  ``None`` is also returned for an ``INVALID`` type, an
        empty name, and chains that lead back to *name*.
    """
    if preset_type is PresetType.INVALID or not name:
        return None

    current = name
    visited = {current}
    changed = False

    for _ in range(max_depth):
        new_name = lookup(preset_type, current)
        if new_name is None:
            break
        current = new_name
        if current in visited:
            break
        visited.add(current)
        changed = True

    if changed and current != name:
        return current
    return None
