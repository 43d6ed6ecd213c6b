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

"""Checks a new preset name must pass before a rename is recorded."""

from __future__ import annotations

from typing import Iterable, NamedTuple

from .common.constants import (
    ILLEGAL_NAME_CHARACTERS,
    MODIFIED_SUFFIX,
    RESERVED_PRESET_NAMES,
)


class NameCheck(NamedTuple):
    """Result of :func:`validate_preset_name`."""

    valid: bool
    name: str  # Candidate with surrounding whitespace removed.
    message: str = ""


def validate_preset_name(
    candidate: str,
    original_name: str,
    existing_names: Iterable[str] = (),
) -> NameCheck:
    """Validate *candidate* as the new name of the preset *original_name*.

    :param candidate: Name as typed by the user. Surrounding whitespace is
        stripped before any check.
    :param original_name: Current name of the preset being renamed.
    :param existing_names: Names already taken by other presets of the same
        type.
    :return: A :class:`NameCheck`; ``message`` explains a rejection.
    """
    name = candidate.strip()

    def reject(message: str) -> NameCheck:
        return NameCheck(False, name, message)

    if not name:
        return reject("The name is not allowed to be empty.")
    if name == original_name:
        return reject("Enter a different name.")
    if any(c in ILLEGAL_NAME_CHARACTERS for c in name):
        return reject("Illegal characters: " + " ".join(ILLEGAL_NAME_CHARACTERS))
    if MODIFIED_SUFFIX in name:
        return reject(f"Name is invalid; illegal suffix: {MODIFIED_SUFFIX.strip()}")
    if name in RESERVED_PRESET_NAMES:
        return reject("Name is unavailable.")
    if name in set(existing_names):
        return reject(f"Preset \"{name}\" already exists.")
    return NameCheck(True, name)
