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
Constants shared across the add-on: file locations, limits and the keys of
slicer project configs that reference presets by name.
"""

# Rename history storage.
HISTORY_FILENAME = "rename_history.json"  # Inside the user presets folder.
PRESETS_SUBDIR = "slicer_presets"  # Below Blender's CONFIG resource directory.
USER_PRESETS_SUBDIR = "user"  # Folder dedicated to user-created presets.
HISTORY_INDENT = 2

# Maximum number of renames followed when resolving a preset name.
DEFAULT_MAX_RESOLVE_DEPTH = 32

# Orca Slicer / BambuStudio project archives.
PROJECT_SETTINGS_PATH = "Metadata/project_settings.config"
PRINTER_SETTINGS_KEY = "printer_settings_id"
FILAMENT_SETTINGS_KEY = "filament_settings_id"
PROJECT_SETTINGS_INDENT = 4

# Preset naming rules applied before a rename is recorded.
ILLEGAL_NAME_CHARACTERS = '<>[]:/\\|?*"'
MODIFIED_SUFFIX = " (modified)"  # Marks unsaved edits in slicer UIs.
RESERVED_PRESET_NAMES = frozenset({
    "Default Setting",
    "Default Filament",
    "Default Printer",
})
