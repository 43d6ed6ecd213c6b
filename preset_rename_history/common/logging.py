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
Logging helpers shared by every module of the add-on.

All messages go through one package logger so users can raise or lower the
verbosity from Blender's Python console::

    import logging
    logging.getLogger("preset_rename_history").setLevel(logging.DEBUG)
"""

import logging

LOGGER_NAME = "preset_rename_history"

_logger = logging.getLogger(LOGGER_NAME)


def debug(*args) -> None:
    """Log a debug message. Arguments are joined with spaces, like print()."""
    _logger.debug(" ".join(str(arg) for arg in args))


def info(*args) -> None:
    _logger.info(" ".join(str(arg) for arg in args))


def warn(*args) -> None:
    """Log a recoverable problem."""
    _logger.warning(" ".join(str(arg) for arg in args))


def error(*args) -> None:
    """Log a failure that was handled but lost data or durability."""
    _logger.error(" ".join(str(arg) for arg in args))
