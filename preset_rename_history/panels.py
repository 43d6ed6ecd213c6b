# Blender add-on to track renamed slicer presets.
# Copyright (C) 2025 Jack
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
Preset rename history sidebar panel - VIEW3D_PT_preset_rename_history.

Lists the most recent renames (newest first) and offers the record and
project-update operators.  Visible in the 3D Viewport sidebar under the
**Presets** tab.
"""

from __future__ import annotations

import time
from typing import List, Sequence

import bpy

from . import api
from .history import RenameRecord


# ===================================================================
#  Constants
# ===================================================================

# Number of renames listed before the rest is summarised.
_MAX_LISTED = 12


# ===================================================================
#  Helpers
# ===================================================================


def _recent_records(records: Sequence[RenameRecord], limit: int = _MAX_LISTED) -> List[RenameRecord]:
    """Return up to *limit* records, most recently recorded first."""
    if limit <= 0:
        return []
    return list(reversed(records[-limit:]))


def _format_record(record: RenameRecord) -> str:
    return f"{record.preset_type.label}: {record.old_name} → {record.new_name}"


def _format_timestamp(timestamp: int) -> str:
    if timestamp <= 0:
        return ""
    try:
        local = time.localtime(timestamp)
    except (OverflowError, OSError, ValueError):
        return ""
    return time.strftime("%Y-%m-%d %H:%M", local)


# ===================================================================
#  Panel
# ===================================================================


class VIEW3D_PT_preset_rename_history(bpy.types.Panel):
    bl_label = "Preset Renames"
    bl_idname = "VIEW3D_PT_preset_rename_history"
    bl_space_type = 'VIEW_3D'
    bl_region_type = 'UI'
    bl_category = "Presets"
    bl_options = {'DEFAULT_CLOSED'}

    def draw(self, context):
        layout = self.layout

        try:
            history = api.get_history()
        except RuntimeError:
            layout.label(text="Rename history unavailable", icon='ERROR')
            return

        col = layout.column(align=True)
        col.operator("preset_history.record_rename", icon='GREASEPENCIL')
        col.operator("preset_history.scan_project", icon='FILE_REFRESH')

        records = history.entries()
        if not records:
            layout.label(text="No renames recorded", icon='INFO')
            return

        box = layout.box()
        for record in _recent_records(records):
            row = box.row()
            row.label(text=_format_record(record))
            stamp = _format_timestamp(record.timestamp)
            if stamp:
                row.label(text=stamp)
        hidden = len(records) - _MAX_LISTED
        if hidden > 0:
            box.label(text=f"... and {hidden} older rename(s)")


def register():
    bpy.utils.register_class(VIEW3D_PT_preset_rename_history)


def unregister():
    bpy.utils.unregister_class(VIEW3D_PT_preset_rename_history)
