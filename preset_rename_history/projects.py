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
Preset references inside slicer project archives.

Orca Slicer and BambuStudio store the presets a project was sliced with in
``Metadata/project_settings.config``, a JSON document inside the ``.3mf``
ZIP::

    {
        "printer_settings_id": "My Printer 0.4 nozzle",
        "filament_settings_id": ["PLA Basic", "PETG HF"],
        ...
    }

When presets are renamed after the project was saved these names go stale.
The helpers here find the references the rename history can map to a
current name, and rewrite the archive with the ones the user picked.
"""

from __future__ import annotations

import json
import os
import tempfile
import zipfile
from typing import Dict, Iterable, List, NamedTuple

from .common.constants import (
    PROJECT_SETTINGS_PATH,
    PRINTER_SETTINGS_KEY,
    FILAMENT_SETTINGS_KEY,
    PROJECT_SETTINGS_INDENT,
)
from .common.logging import debug, warn
from .history import PresetType, RenameHistory


class PresetReferences(NamedTuple):
    """Preset names a project refers to."""

    printer: str
    filaments: List[str]


class RenameUpdateOption(NamedTuple):
    """A stale reference together with the name it should become."""

    preset_type: PresetType
    old_name: str
    new_name: str


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _read_project_settings(archive: zipfile.ZipFile) -> dict | None:
    """Parse the project settings of an open archive, or ``None``."""
    if PROJECT_SETTINGS_PATH not in archive.namelist():
        return None
    try:
        settings = json.loads(archive.read(PROJECT_SETTINGS_PATH).decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        warn(f"Project settings in {archive.filename} are invalid: {e}")
        return None
    if not isinstance(settings, dict):
        warn(f"Project settings in {archive.filename} are not a JSON object")
        return None
    return settings


def _filament_names(settings: dict) -> List[str]:
    value = settings.get(FILAMENT_SETTINGS_KEY, [])
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [name for name in value if isinstance(name, str) and name]


def read_preset_references(filepath: str) -> PresetReferences:
    """Return the printer and filament names referenced by a project.

    :param filepath: Path to a ``.3mf`` file.
    :return: Empty references when the archive carries no (valid) Orca
        project settings.
    :raises zipfile.BadZipFile: If the file is not a valid ZIP.
    """
    with zipfile.ZipFile(filepath, "r") as archive:
        settings = _read_project_settings(archive)
    if settings is None:
        return PresetReferences("", [])

    printer = settings.get(PRINTER_SETTINGS_KEY, "")
    if not isinstance(printer, str):
        printer = ""
    return PresetReferences(printer, _filament_names(settings))


def find_renamed_references(
    history: RenameHistory,
    filepath: str,
) -> List[RenameUpdateOption]:
    """List the references of a project that point at renamed presets.

    Every distinct referenced name appears at most once, printer first, then
    filaments in slot order.

    :raises zipfile.BadZipFile: If the file is not a valid ZIP.
    """
    references = read_preset_references(filepath)
    options: List[RenameUpdateOption] = []
    seen = set()

    candidates = [(PresetType.PRINTER, references.printer)]
    candidates += [(PresetType.FILAMENT, name) for name in references.filaments]
    for preset_type, name in candidates:
        if not name or (preset_type, name) in seen:
            continue
        seen.add((preset_type, name))
        current = history.resolve(preset_type, name)
        if current is not None:
            options.append(RenameUpdateOption(preset_type, name, current))
    return options


def describe_option(option: RenameUpdateOption) -> str:
    """Label text for one option in the update dialog."""
    return f"{option.preset_type.label}:\n   {option.old_name}\n   -> {option.new_name}"


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _apply_to_settings(settings: dict, options: Iterable[RenameUpdateOption]) -> int:
    """Rename references in *settings* in place. Returns the number changed."""
    renames: Dict[PresetType, Dict[str, str]] = {
        PresetType.PRINTER: {},
        PresetType.FILAMENT: {},
    }
    for option in options:
        if option.preset_type in renames:
            renames[option.preset_type][option.old_name] = option.new_name

    changed = 0
    printer = settings.get(PRINTER_SETTINGS_KEY)
    if isinstance(printer, str) and printer in renames[PresetType.PRINTER]:
        settings[PRINTER_SETTINGS_KEY] = renames[PresetType.PRINTER][printer]
        changed += 1

    filaments = settings.get(FILAMENT_SETTINGS_KEY)
    filament_renames = renames[PresetType.FILAMENT]
    if isinstance(filaments, str) and filaments in filament_renames:
        settings[FILAMENT_SETTINGS_KEY] = filament_renames[filaments]
        changed += 1
    elif isinstance(filaments, list):
        for slot, name in enumerate(filaments):
            if isinstance(name, str) and name in filament_renames:
                filaments[slot] = filament_renames[name]
                changed += 1
    return changed


def apply_reference_updates(
    filepath: str,
    options: Iterable[RenameUpdateOption],
    output_path: str | None = None,
) -> int:
    """Rewrite a project so the selected stale references use the new names.

    Every other archive member is copied unchanged.  The result is written
    to a temporary file next to the target and moved into place, so a
    failure never leaves a half-written project behind.

    :param filepath: Project to read.
    :param options: References to update, usually a user selection from
        :func:`find_renamed_references`.
    :param output_path: Where to write the result. Defaults to *filepath*.
    :return: Number of references changed. Nothing is written when zero.
    :raises zipfile.BadZipFile: If the file is not a valid ZIP.
    :raises OSError: If the result cannot be written.
    """
    target = output_path or filepath
    with zipfile.ZipFile(filepath, "r") as archive:
        settings = _read_project_settings(archive)
        if settings is None:
            return 0
        changed = _apply_to_settings(settings, options)
        if not changed:
            return 0

        directory = os.path.dirname(os.path.abspath(target))
        fd, temp_path = tempfile.mkstemp(suffix=".3mf", dir=directory)
        os.close(fd)
        try:
            with zipfile.ZipFile(temp_path, "w", zipfile.ZIP_DEFLATED) as output:
                for info in archive.infolist():
                    if info.filename == PROJECT_SETTINGS_PATH:
                        data = json.dumps(settings, indent=PROJECT_SETTINGS_INDENT).encode("utf-8")
                    else:
                        data = archive.read(info)
                    output.writestr(info, data)
        except BaseException:
            os.remove(temp_path)
            raise

    try:
        os.replace(temp_path, target)
    except OSError:
        os.remove(temp_path)
        raise
    debug(f"Updated {changed} preset reference(s) in {target}")
    return changed
