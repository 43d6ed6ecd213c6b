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
Rename history - the record of which presets were renamed to what.

Projects and settings refer to printer and filament presets by name.  This
package keeps an append-only log of renames in a JSON file and resolves an
old name to the name the preset carries today.
"""

from .types import (
    PresetType,
    RenameRecord,
    PRESET_TYPE_ITEMS,
)

from .resolver import (
    RenameIndex,
    find_latest,
    resolve_name,
    scan_lookup,
)

from .storage import (
    RenameHistory,
    LoadResult,
    SaveResult,
)

__all__ = [
    "PresetType",
    "RenameRecord",
    "PRESET_TYPE_ITEMS",
    "RenameIndex",
    "find_latest",
    "resolve_name",
    "scan_lookup",
    "RenameHistory",
    "LoadResult",
    "SaveResult",
]
