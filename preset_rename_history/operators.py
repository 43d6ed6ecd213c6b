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

"""Blender operators for recording renames and updating project references."""

from __future__ import annotations

import os
import zipfile

import bpy

from . import api
from .history import PresetType, PRESET_TYPE_ITEMS
from .naming import validate_preset_name
from .projects import (
    RenameUpdateOption,
    apply_reference_updates,
    describe_option,
    find_renamed_references,
)


class PRESETHIST_PG_update_option(bpy.types.PropertyGroup):
    """One stale preset reference listed in the update dialog."""

    preset_type: bpy.props.EnumProperty(items=PRESET_TYPE_ITEMS)
    old_name: bpy.props.StringProperty()
    new_name: bpy.props.StringProperty()
    selected: bpy.props.BoolProperty(name="Update", default=True)


class PRESETHIST_OT_record_rename(bpy.types.Operator):
    """Record that a slicer preset was renamed"""

    bl_idname = "preset_history.record_rename"
    bl_label = "Record Preset Rename"
    bl_options = {'INTERNAL'}

    preset_type: bpy.props.EnumProperty(
        name="Type",
        items=PRESET_TYPE_ITEMS,
        default="FILAMENT",
    )
    old_name: bpy.props.StringProperty(name="Current Name")
    new_name: bpy.props.StringProperty(name="New Name")

    def invoke(self, context, event):
        if not self.new_name:
            self.new_name = self.old_name
        return context.window_manager.invoke_props_dialog(self)

    def draw(self, context):
        layout = self.layout
        layout.prop(self, "preset_type")
        layout.prop(self, "old_name")
        layout.prop(self, "new_name")
        check = validate_preset_name(self.new_name, self.old_name)
        if not check.valid:
            layout.label(text=check.message, icon='ERROR')

    def execute(self, context):
        old = self.old_name.strip()
        if not old:
            self.report({'WARNING'}, "Current name cannot be empty")
            return {'CANCELLED'}
        check = validate_preset_name(self.new_name, old)
        if not check.valid:
            self.report({'WARNING'}, check.message)
            return {'CANCELLED'}

        history = api.get_history()
        history.add_entry(PresetType[self.preset_type], old, check.name)
        if history.last_save is not None and history.last_save.status != "OK":
            self.report({'WARNING'}, "Rename recorded, but the history file could not be saved")
        else:
            self.report({'INFO'}, f"Recorded rename \"{old}\" -> \"{check.name}\"")
        return {'FINISHED'}


class PRESETHIST_OT_resolve_name(bpy.types.Operator):
    """Look up the current name of a preset that may have been renamed"""

    bl_idname = "preset_history.resolve_name"
    bl_label = "Resolve Preset Name"
    bl_options = {'INTERNAL'}

    preset_type: bpy.props.EnumProperty(
        name="Type",
        items=PRESET_TYPE_ITEMS,
        default="FILAMENT",
    )
    preset_name: bpy.props.StringProperty(name="Name")

    def invoke(self, context, event):
        return context.window_manager.invoke_props_dialog(self)

    def execute(self, context):
        current = api.get_history().resolve(PresetType[self.preset_type], self.preset_name)
        if current is None:
            self.report({'INFO'}, f"\"{self.preset_name}\" has not been renamed")
        else:
            self.report({'INFO'}, f"\"{self.preset_name}\" is now \"{current}\"")
        return {'FINISHED'}


class PRESETHIST_OT_scan_project(bpy.types.Operator):
    """Pick a slicer project and update references to renamed presets"""

    bl_idname = "preset_history.scan_project"
    bl_label = "Update Renamed Presets in Project"
    bl_options = {'INTERNAL'}

    filepath: bpy.props.StringProperty(subtype='FILE_PATH')
    filter_glob: bpy.props.StringProperty(default="*.3mf", options={'HIDDEN'})

    def invoke(self, context, event):
        context.window_manager.fileselect_add(self)
        return {'RUNNING_MODAL'}

    def execute(self, context):
        if not self.filepath or not os.path.isfile(self.filepath):
            self.report({'ERROR'}, "File not found")
            return {'CANCELLED'}

        try:
            options = find_renamed_references(api.get_history(), self.filepath)
        except zipfile.BadZipFile:
            self.report({'ERROR'}, "Not a valid 3MF archive")
            return {'CANCELLED'}
        except OSError as e:
            self.report({'ERROR'}, f"Failed to read file: {e}")
            return {'CANCELLED'}

        if not options:
            self.report({'INFO'}, "No renamed presets are referenced by this project")
            return {'FINISHED'}

        bpy.ops.preset_history.update_project('INVOKE_DEFAULT', filepath=self.filepath)
        return {'FINISHED'}


class PRESETHIST_OT_update_project(bpy.types.Operator):
    """Replace references to renamed presets in a slicer project"""

    bl_idname = "preset_history.update_project"
    bl_label = "Update Renamed Presets"
    bl_options = {'INTERNAL'}

    filepath: bpy.props.StringProperty(subtype='FILE_PATH', options={'HIDDEN'})
    options: bpy.props.CollectionProperty(type=PRESETHIST_PG_update_option)

    def _collect(self) -> None:
        """Fill :attr:`options` from the project; every item starts selected."""
        self.options.clear()
        for option in find_renamed_references(api.get_history(), self.filepath):
            item = self.options.add()
            item.preset_type = option.preset_type.name
            item.old_name = option.old_name
            item.new_name = option.new_name
            item.selected = True

    def invoke(self, context, event):
        try:
            self._collect()
        except (zipfile.BadZipFile, OSError) as e:
            self.report({'ERROR'}, f"Failed to read project: {e}")
            return {'CANCELLED'}
        if not self.options:
            self.report({'INFO'}, "No renamed presets are referenced by this project")
            return {'CANCELLED'}
        return context.window_manager.invoke_props_dialog(self, width=520)

    def draw(self, context):
        layout = self.layout
        layout.label(text="The following presets were renamed.")
        layout.label(text="Select which ones you would like to update in this project.")
        box = layout.box()
        for item in self.options:
            option = RenameUpdateOption(PresetType[item.preset_type], item.old_name, item.new_name)
            row = box.row()
            row.prop(item, "selected", text="")
            column = row.column(align=True)
            for line in describe_option(option).splitlines():
                column.label(text=line)

    def execute(self, context):
        try:
            if not self.options:
                self._collect()
            selection = [
                RenameUpdateOption(PresetType[item.preset_type], item.old_name, item.new_name)
                for item in self.options
                if item.selected
            ]
            if not selection:
                self.report({'INFO'}, "Nothing selected")
                return {'CANCELLED'}
            changed = apply_reference_updates(self.filepath, selection)
        except zipfile.BadZipFile:
            self.report({'ERROR'}, "Not a valid 3MF archive")
            return {'CANCELLED'}
        except OSError as e:
            self.report({'ERROR'}, f"Failed to update project: {e}")
            return {'CANCELLED'}

        self.report({'INFO'}, f"Updated {changed} preset reference(s)")
        return {'FINISHED'}
