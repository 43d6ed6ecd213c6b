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
File-based rename history for slicer presets.

The history is an append-only list of rename records mirrored to a single
JSON file, by default ``<config>/slicer_presets/user/rename_history.json``:

.. code-block:: json

    {
      "entries": [
        {
          "type": "filament",
          "old": "PLA Basic",
          "new": "PLA Basic (Matte)",
          "timestamp": 1760780000
        }
      ]
    }

The file is best-effort.  A missing, unreadable or corrupt file loads as an
empty history and a failed write only costs durability; neither is ever
raised to the caller.  :meth:`RenameHistory.load` and
:meth:`RenameHistory.save` return status objects so the outcome can still be
inspected.
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from typing import List, Tuple

from ..common.constants import DEFAULT_MAX_RESOLVE_DEPTH, HISTORY_INDENT
from ..common.logging import debug, warn, error
from .resolver import RenameIndex, resolve_name
from .types import PresetType, RenameRecord


# ---------------------------------------------------------------------------
# Status objects
# ---------------------------------------------------------------------------

@dataclass
class LoadResult:
    """Outcome of :meth:`RenameHistory.load`.

    ``status`` is ``"OK"`` when the file was parsed, ``"MISSING"`` when it
    does not exist yet and ``"ERROR"`` when it could not be read or parsed.
    """

    status: str
    num_loaded: int = 0
    num_skipped: int = 0
    error_message: str = ""


@dataclass
class SaveResult:
    """Outcome of :meth:`RenameHistory.save`. ``status`` is ``"OK"`` or ``"ERROR"``."""

    status: str
    num_written: int = 0
    error_message: str = ""


# ---------------------------------------------------------------------------
# RenameHistory
# ---------------------------------------------------------------------------

class RenameHistory:
    """Rename records of printer and filament presets, persisted as JSON.

    One instance is created per running add-on (see ``api.init_history``)
    and handed to whatever needs it.  It is not thread-safe and does not
    guard the file against other writers.

    :param path: Location of the JSON file. Read once, on construction.
    :param max_depth: Maximum number of renames :meth:`resolve` follows.
    """

    def __init__(self, path: str, max_depth: int = DEFAULT_MAX_RESOLVE_DEPTH):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self._path = os.fspath(path)
        self.max_depth = max_depth
        self._records: List[RenameRecord] = []
        self._index = RenameIndex()
        self.last_save: SaveResult | None = None
        self.last_load = self.load()

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RenameHistory({self._path!r}, {len(self._records)} entries)"

    @property
    def path(self) -> str:
        return self._path

    # -- Persistence --------------------------------------------------------

    def load(self) -> LoadResult:
        """Replace the in-memory records with the contents of the file.

        Elements that are not objects or that break the record invariant are
        skipped.  When the file does not exist its folder is created so a
        later :meth:`save` can succeed.
        """
        self._records.clear()
        self._index.clear()

        if not os.path.exists(self._path):
            directory = os.path.dirname(self._path)
            if directory:
                try:
                    os.makedirs(directory, exist_ok=True)
                except OSError as e:
                    warn(f"Cannot create rename history folder {directory}: {e}")
            debug(f"No rename history at {self._path}, starting empty")
            return LoadResult("MISSING")

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, OSError) as e:
            warn(f"Ignoring unreadable rename history {self._path}: {e}")
            return LoadResult("ERROR", error_message=str(e))

        if not isinstance(data, dict):
            warn(f"Ignoring rename history {self._path}: top level is not an object")
            return LoadResult("ERROR", error_message="top level is not an object")
        items = data.get("entries", [])
        if not isinstance(items, list):
            warn(f"Ignoring rename history {self._path}: 'entries' is not an array")
            return LoadResult("ERROR", error_message="'entries' is not an array")

        skipped = 0
        for item in items:
            record = RenameRecord.from_json(item)
            if record is None:
                skipped += 1
                continue
            self._records.append(record)
        self._index.rebuild(self._records)

        if skipped:
            warn(f"Skipped {skipped} malformed rename history entr{'y' if skipped == 1 else 'ies'}")
        debug(f"Loaded {len(self._records)} rename(s) from {self._path}")
        return LoadResult("OK", num_loaded=len(self._records), num_skipped=skipped)

    def save(self) -> SaveResult:
        """Write every record to the file, replacing its previous contents."""
        data = {"entries": [record.to_json() for record in self._records]}
        try:
            directory = os.path.dirname(self._path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=HISTORY_INDENT)
        except OSError as e:
            error(f"Failed to save rename history to {self._path}: {e}")
            self.last_save = SaveResult("ERROR", error_message=str(e))
            return self.last_save

        self.last_save = SaveResult("OK", num_written=len(self._records))
        return self.last_save

    # -- Collaborator API ---------------------------------------------------

    def add_entry(self, preset_type: PresetType, old_name: str, new_name: str) -> None:
        """Record that *old_name* was renamed to *new_name* and save.

        Invalid requests (``INVALID`` type, an empty name, or identical names)
        are ignored; callers validate names before committing a rename.
        """
        if (
            not isinstance(preset_type, PresetType)
            or preset_type is PresetType.INVALID
            or not isinstance(old_name, str)
            or not isinstance(new_name, str)
            or not old_name
            or not new_name
            or old_name == new_name
        ):
            debug(f"Ignoring invalid rename {preset_type!r}: {old_name!r} -> {new_name!r}")
            return

        self._records.append(RenameRecord(
            preset_type=preset_type,
            old_name=old_name,
            new_name=new_name,
            timestamp=int(time.time()),
        ))
        self._index.add(self._records, len(self._records) - 1)
        debug(f"Recorded {preset_type.to_token()} rename '{old_name}' -> '{new_name}'")
        self.save()

    def entries(self) -> Tuple[RenameRecord, ...]:
        """All records in insertion order (oldest first)."""
        return tuple(self._records)

    def resolve(self, preset_type: PresetType, name: str) -> str | None:
        """Return the current name of *name*, or ``None`` if it was not renamed.

        See :func:`.resolver.resolve_name` for the chain-following rules.
        """
        return resolve_name(self._index.lookup, preset_type, name, self.max_depth)
