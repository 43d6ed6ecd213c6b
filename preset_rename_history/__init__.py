# Blender add-on to track renamed slicer presets.
# Copyright (C) 2025 Jack
# This add-on is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This add-on is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

# Reload functionality - must check before importing bpy
_needs_reload = "bpy" in locals()

import os

import bpy.types  # To (un)register the add-on classes.
import bpy.props  # For addon preferences properties.
import bpy.utils  # To (un)register the add-on.

from . import (
    common,
    history,
    naming,
    projects,
    api,
    operators,
    panels,
)

if _needs_reload:
    import importlib

    common = importlib.reload(common)
    history = importlib.reload(history)
    naming = importlib.reload(naming)
    projects = importlib.reload(projects)
    api = importlib.reload(api)
    operators = importlib.reload(operators)
    panels = importlib.reload(panels)

from .common.constants import DEFAULT_MAX_RESOLVE_DEPTH, HISTORY_FILENAME
from .common.logging import debug
from .operators import (
    PRESETHIST_PG_update_option,
    PRESETHIST_OT_record_rename,
    PRESETHIST_OT_resolve_name,
    PRESETHIST_OT_scan_project,
    PRESETHIST_OT_update_project,
)

# IDE and Documentation support.
__all__ = [
    "PresetHistoryPreferences",
    "PRESETHIST_PG_update_option",
    "PRESETHIST_OT_record_rename",
    "PRESETHIST_OT_resolve_name",
    "PRESETHIST_OT_scan_project",
    "PRESETHIST_OT_update_project",
    "register",
    "unregister",
]

"""
Track renamed printer and filament presets and fix stale references to them.
"""


def _history_path(preferences) -> str | None:
    """History file chosen in the preferences, or ``None`` for the default."""
    if preferences is None or not preferences.history_directory:
        return None
    return os.path.join(bpy.path.abspath(preferences.history_directory), HISTORY_FILENAME)


def _reload_history(preferences, context) -> None:
    """Re-create the history after the storage folder changed."""
    api.init_history(_history_path(preferences), max_depth=preferences.max_resolve_depth)


def _update_max_depth(preferences, context) -> None:
    try:
        api.get_history().max_depth = preferences.max_resolve_depth
    except RuntimeError:
        pass  # Not enabled yet; register() reads the value.


class PresetHistoryPreferences(bpy.types.AddonPreferences):
    """
    Preferences for the preset rename history add-on.
    """

    bl_idname = __package__

    history_directory: bpy.props.StringProperty(
        name="History Folder",
        description=(
            "Folder holding rename_history.json. "
            "Leave blank to use the slicer_presets/user folder in Blender's config directory"
        ),
        subtype='DIR_PATH',
        default="",
        update=_reload_history,
    )

    max_resolve_depth: bpy.props.IntProperty(
        name="Maximum Rename Chain",
        description="Number of consecutive renames followed when resolving an old preset name",
        default=DEFAULT_MAX_RESOLVE_DEPTH,
        min=1,
        max=1024,
        update=_update_max_depth,
    )

    def draw(self, context):
        layout = self.layout
        layout.prop(self, "history_directory")
        layout.prop(self, "max_resolve_depth")
        try:
            history_file = api.get_history()
        except RuntimeError:
            return
        layout.label(text=f"{len(history_file)} rename(s) in {history_file.path}", icon='INFO')


def _get_preferences():
    """Return the add-on preferences, or ``None`` when not loaded as an add-on."""
    addon = bpy.context.preferences.addons.get(__package__)
    return addon.preferences if addon is not None else None


classes = (
    PresetHistoryPreferences,
    PRESETHIST_PG_update_option,
    PRESETHIST_OT_record_rename,
    PRESETHIST_OT_resolve_name,
    PRESETHIST_OT_scan_project,
    PRESETHIST_OT_update_project,
)


def register() -> None:
    for cls in classes:
        bpy.utils.register_class(cls)
    panels.register()

    preferences = _get_preferences()
    max_depth = preferences.max_resolve_depth if preferences is not None else DEFAULT_MAX_RESOLVE_DEPTH
    history_file = api.init_history(_history_path(preferences), max_depth=max_depth)
    debug(f"Rename history loaded: {history_file.last_load.status}, {len(history_file)} rename(s)")

    api._register_api()


def unregister() -> None:
    api._unregister_api()
    api.release_history()

    panels.unregister()
    for cls in reversed(classes):
        bpy.utils.unregister_class(cls)


# Allow the add-on to be ran directly without installation.
if __name__ == "__main__":
    register()
