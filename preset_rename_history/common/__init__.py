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
Shared building blocks without any Blender dependency.

- ``constants`` - file names, limits and project config keys
- ``logging``   - ``debug`` / ``info`` / ``warn`` / ``error`` helpers
"""

from . import constants  # noqa: F401
from . import logging  # noqa: F401
