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
Public API for recording and resolving preset renames.

The add-on creates one :class:`~.history.RenameHistory` when it is enabled
and releases it when disabled.  Operators, panels and other add-ons reach
that instance through :func:`get_history`, or use the convenience wrappers
below.

Quick start::

    from preset_rename_history.api import record_rename, resolve_preset_name

    record_rename("filament", "PLA Basic", "PLA Basic Matte")
    resolve_preset_name("filament", "PLA Basic")   # -> "PLA Basic Matte"
    resolve_preset_name("printer", "PLA Basic")    # -> None

Scripts running without the add-on enabled can own their own history::

    from preset_rename_history.history import RenameHistory, PresetType

    history = RenameHistory("/tmp/rename_history.json")
    history.add_entry(PresetType.PRINTER, "Old", "New")
"""

from __future__ import annotations

import os
import sys
from typing import Tuple

import bpy

from .common.constants import (
    DEFAULT_MAX_RESOLVE_DEPTH,
    HISTORY_FILENAME,
    PRESETS_SUBDIR,
    USER_PRESETS_SUBDIR,
)
from .common.logging import debug
from .history import PresetType, RenameHistory, RenameRecord


# ═══════════════════════════════════════════════════════════════════════════
# API Version & Registry
# ═══════════════════════════════════════════════════════════════════════════
#
# Registered in bpy.app.driver_namespace while the add-on is enabled so other
# add-ons can find it without importing by path:
#
#     api = bpy.app.driver_namespace.get("preset_rename_history")
#     if api is not None:
#         new_name = api.resolve_preset_name("printer", stored_name)

#: API version following semantic versioning (MAJOR.MINOR.PATCH).
API_VERSION = (1, 0, 0)

API_VERSION_STRING = ".".join(str(v) for v in API_VERSION)

API_CAPABILITIES = frozenset({
    "record",           # record_rename()
    "resolve",          # resolve_preset_name()
    "list",             # list_renames()
    "validate",         # naming.validate_preset_name()
    "project_update",   # projects.find_renamed_references / apply_reference_updates
})

_REGISTRY_KEY = "preset_rename_history"

# The history owned by the enabled add-on. Set by init_history().
_history: RenameHistory | None = None


def _register_api() -> None:
    """Register this module in bpy.app.driver_namespace for discovery."""
    bpy.app.driver_namespace[_REGISTRY_KEY] = sys.modules[__name__]
    debug(f"Registered preset rename history API v{API_VERSION_STRING}")


def _unregister_api() -> None:
    bpy.app.driver_namespace.pop(_REGISTRY_KEY, None)


def is_available() -> bool:
    """Check if the API is registered in bpy.app.driver_namespace."""
    return _REGISTRY_KEY in bpy.app.driver_namespace


def get_api():
    """Return the registered API module, or ``None``."""
    return bpy.app.driver_namespace.get(_REGISTRY_KEY)


def has_capability(capability: str) -> bool:
    return capability in API_CAPABILITIES


def check_version(minimum: Tuple[int, int, int]) -> bool:
    """Check if the API version meets a minimum ``(major, minor, patch)``."""
    return API_VERSION >= minimum


# ═══════════════════════════════════════════════════════════════════════════
# History ownership
# ═══════════════════════════════════════════════════════════════════════════

def default_history_path() -> str:
    """Return ``<config>/slicer_presets/user/rename_history.json``."""
    config_dir = bpy.utils.user_resource('CONFIG')
    return os.path.join(config_dir, PRESETS_SUBDIR, USER_PRESETS_SUBDIR, HISTORY_FILENAME)


def init_history(
    path: str | None = None,
    max_depth: int = DEFAULT_MAX_RESOLVE_DEPTH,
) -> RenameHistory:
    """Create (and load) the history used by the add-on.

    Replaces any history created earlier.

    :param path: JSON file to use. Defaults to :func:`default_history_path`.
    :param max_depth: Maximum renames followed per resolution.
    """
    global _history
    _history = RenameHistory(path or default_history_path(), max_depth=max_depth)
    debug(f"Using rename history {_history.path}")
    return _history


def release_history() -> None:
    global _history
    _history = None


def get_history() -> RenameHistory:
    """Return the history owned by the add-on.

    :raises RuntimeError: If the add-on is not enabled and
        :func:`init_history` was never called.
    """
    if _history is None:
        raise RuntimeError(
            "Preset rename history is not initialised; enable the add-on "
            "or call init_history() first"
        )
    return _history


def _coerce_type(preset_type) -> PresetType:
    """Accept a :class:`PresetType`, a file token or an enum identifier."""
    if isinstance(preset_type, PresetType):
        return preset_type
    if isinstance(preset_type, str):
        return PresetType.from_token(preset_type.lower())
    return PresetType.INVALID


# ═══════════════════════════════════════════════════════════════════════════
# Convenience wrappers
# ═══════════════════════════════════════════════════════════════════════════

def record_rename(preset_type, old_name: str, new_name: str) -> None:
    """Record a rename that was already committed to the preset itself.

    :param preset_type: :class:`PresetType`, or ``"printer"`` / ``"filament"``.
    """
    get_history().add_entry(_coerce_type(preset_type), old_name, new_name)


def resolve_preset_name(preset_type, name: str) -> str | None:
    """Return the current name of a preset, or ``None`` if it was not renamed."""
    return get_history().resolve(_coerce_type(preset_type), name)


def list_renames() -> Tuple[RenameRecord, ...]:
    """All recorded renames, oldest first."""
    return get_history().entries()


__all__ = [
    "API_VERSION",
    "API_VERSION_STRING",
    "API_CAPABILITIES",
    "is_available",
    "get_api",
    "has_capability",
    "check_version",
    "default_history_path",
    "init_history",
    "release_history",
    "get_history",
    "record_rename",
    "resolve_preset_name",
    "list_renames",
    "PresetType",
    "RenameRecord",
]
