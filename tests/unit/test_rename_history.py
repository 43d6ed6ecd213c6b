"""
Unit tests for the rename history store and resolver.

Covers ``preset_rename_history.history.storage`` and
``preset_rename_history.history.resolver``:
- add_entry - guard clause, timestamping, immediate save
- resolve - direct renames, chains, cycles, type isolation, hop bound
- load / save - round-trip, malformed entries, corrupt and missing files
- RenameIndex - agrees with the plain backward scan

Every test uses its own temporary history file.
"""

import json
import os
import shutil
import tempfile
import time
import unittest

from preset_rename_history.history import (
    PresetType,
    RenameHistory,
    RenameRecord,
    find_latest,
    resolve_name,
    scan_lookup,
)

PRINTER = PresetType.PRINTER
FILAMENT = PresetType.FILAMENT


class HistoryTestCase(unittest.TestCase):
    """Creates a temp directory and a fresh history inside it."""

    def setUp(self):
        self._temp_dir = tempfile.mkdtemp(prefix="rename_history_test_")
        self.path = os.path.join(self._temp_dir, "user", "rename_history.json")
        self.history = RenameHistory(self.path)

    def tearDown(self):
        shutil.rmtree(self._temp_dir, ignore_errors=True)

    def write_file(self, data):
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)

    def read_file(self):
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)


class AddEntryTests(HistoryTestCase):
    """Tests for RenameHistory.add_entry()."""

    def test_resolves_to_new_name(self):
        self.history.add_entry(PRINTER, "My Printer", "Workshop Printer")
        self.assertEqual(self.history.resolve(PRINTER, "My Printer"), "Workshop Printer")

    def test_appends_in_order(self):
        self.history.add_entry(FILAMENT, "A", "B")
        self.history.add_entry(PRINTER, "C", "D")
        entries = self.history.entries()
        self.assertEqual([e.old_name for e in entries], ["A", "C"])
        self.assertEqual(entries[1].preset_type, PRINTER)

    def test_timestamp_is_current_seconds(self):
        before = int(time.time())
        self.history.add_entry(FILAMENT, "A", "B")
        after = int(time.time())
        stamp = self.history.entries()[0].timestamp
        self.assertIsInstance(stamp, int)
        self.assertTrue(before <= stamp <= after)

    def test_same_names_ignored(self):
        """Renaming a preset to its own name leaves the history unchanged."""
        self.history.add_entry(FILAMENT, "A", "B")
        self.history.add_entry(FILAMENT, "A", "A")
        self.assertEqual(len(self.history), 1)

    def test_empty_names_ignored(self):
        self.history.add_entry(FILAMENT, "", "B")
        self.history.add_entry(FILAMENT, "A", "")
        self.assertEqual(len(self.history), 0)

    def test_invalid_type_ignored(self):
        self.history.add_entry(PresetType.INVALID, "A", "B")
        self.history.add_entry("printer", "A", "B")
        self.assertEqual(len(self.history), 0)

    def test_non_string_names_ignored(self):
        self.history.add_entry(PRINTER, 1, 2)
        self.history.add_entry(PRINTER, "A", None)
        self.assertEqual(len(self.history), 0)
        self.assertFalse(os.path.exists(self.path))

    def test_ignored_entry_does_not_write(self):
        self.history.add_entry(FILAMENT, "A", "A")
        self.assertFalse(os.path.exists(self.path))
        self.assertIsNone(self.history.last_save)

    def test_saves_immediately(self):
        self.history.add_entry(FILAMENT, "PLA", "PLA Matte")
        data = self.read_file()
        self.assertEqual(len(data["entries"]), 1)
        self.assertEqual(data["entries"][0]["type"], "filament")
        self.assertEqual(data["entries"][0]["old"], "PLA")
        self.assertEqual(data["entries"][0]["new"], "PLA Matte")
        self.assertEqual(self.history.last_save.status, "OK")

    def test_entries_is_read_only_copy(self):
        self.history.add_entry(FILAMENT, "A", "B")
        entries = self.history.entries()
        self.assertIsInstance(entries, tuple)
        self.history.add_entry(FILAMENT, "B", "C")
        self.assertEqual(len(entries), 1)


class ResolveTests(HistoryTestCase):
    """Tests for RenameHistory.resolve()."""

    def test_unknown_name(self):
        self.assertIsNone(self.history.resolve(PRINTER, "Never Renamed"))

    def test_new_name_is_current(self):
        self.history.add_entry(PRINTER, "A", "B")
        self.assertIsNone(self.history.resolve(PRINTER, "B"))

    def test_chain(self):
        self.history.add_entry(FILAMENT, "A", "B")
        self.history.add_entry(FILAMENT, "B", "C")
        self.assertEqual(self.history.resolve(FILAMENT, "A"), "C")
        self.assertEqual(self.history.resolve(FILAMENT, "B"), "C")

    def test_cycle_back_to_start_is_no_rename(self):
        self.history.add_entry(FILAMENT, "A", "B")
        self.history.add_entry(FILAMENT, "B", "A")
        self.assertIsNone(self.history.resolve(FILAMENT, "A"))
        self.assertIsNone(self.history.resolve(FILAMENT, "B"))

    def test_cycle_not_through_start(self):
        """X -> A -> B -> A stops at the repeated name A."""
        self.history.add_entry(FILAMENT, "X", "A")
        self.history.add_entry(FILAMENT, "A", "B")
        self.history.add_entry(FILAMENT, "B", "A")
        self.assertEqual(self.history.resolve(FILAMENT, "X"), "A")

    def test_type_isolation(self):
        self.history.add_entry(PRINTER, "A", "B")
        self.assertIsNone(self.history.resolve(FILAMENT, "A"))
        self.assertEqual(self.history.resolve(PRINTER, "A"), "B")

    def test_latest_rename_wins(self):
        """A name renamed away twice resolves through the latest record."""
        self.history.add_entry(PRINTER, "A", "B")
        self.history.add_entry(PRINTER, "A", "C")
        self.assertEqual(self.history.resolve(PRINTER, "A"), "C")

    def test_reused_name(self):
        """A -> B, then a new preset named A is renamed to C."""
        self.history.add_entry(FILAMENT, "A", "B")
        self.history.add_entry(FILAMENT, "B", "D")
        self.history.add_entry(FILAMENT, "A", "C")
        self.assertEqual(self.history.resolve(FILAMENT, "A"), "C")
        self.assertEqual(self.history.resolve(FILAMENT, "B"), "D")

    def test_invalid_input(self):
        self.history.add_entry(PRINTER, "A", "B")
        self.assertIsNone(self.history.resolve(PresetType.INVALID, "A"))
        self.assertIsNone(self.history.resolve(PRINTER, ""))

    def test_hop_bound(self):
        """A chain longer than the bound stops inside the bound."""
        for i in range(40):
            self.history.add_entry(PRINTER, f"P{i}", f"P{i + 1}")
        self.assertEqual(self.history.resolve(PRINTER, "P0"), "P32")
        self.assertEqual(self.history.resolve(PRINTER, "P10"), "P40")

    def test_configurable_hop_bound(self):
        self.history.max_depth = 3
        for i in range(10):
            self.history.add_entry(PRINTER, f"P{i}", f"P{i + 1}")
        self.assertEqual(self.history.resolve(PRINTER, "P0"), "P3")

    def test_invalid_max_depth(self):
        with self.assertRaises(ValueError):
            RenameHistory(self.path, max_depth=0)


class ResolveNameTests(unittest.TestCase):
    """Tests for resolver.resolve_name() with a scanning lookup."""

    def test_scan_lookup_prefers_latest(self):
        records = [
            RenameRecord(FILAMENT, "A", "B"),
            RenameRecord(FILAMENT, "A", "C"),
        ]
        self.assertEqual(find_latest(records, FILAMENT, "A").new_name, "C")
        self.assertIsNone(find_latest(records, PRINTER, "A"))
        self.assertEqual(resolve_name(scan_lookup(records), FILAMENT, "A"), "C")

    def test_index_matches_scan(self):
        """Index-backed resolution gives the same answers as the scan."""
        pairs = [
            (FILAMENT, "A", "B"), (FILAMENT, "B", "C"), (PRINTER, "A", "Z"),
            (FILAMENT, "C", "A"), (FILAMENT, "D", "B"), (PRINTER, "Z", "A"),
            (FILAMENT, "A", "E"),
        ]
        with tempfile.TemporaryDirectory() as temp_dir:
            history = RenameHistory(os.path.join(temp_dir, "h.json"))
            for preset_type, old, new in pairs:
                history.add_entry(preset_type, old, new)
            lookup = scan_lookup(history.entries())
            for preset_type in (PRINTER, FILAMENT):
                for name in "ABCDEZ":
                    self.assertEqual(
                        history.resolve(preset_type, name),
                        resolve_name(lookup, preset_type, name),
                        f"{preset_type} {name}",
                    )


class LoadSaveTests(HistoryTestCase):
    """Tests for RenameHistory.load() / save()."""

    def test_missing_file_creates_folder(self):
        self.assertEqual(self.history.last_load.status, "MISSING")
        self.assertEqual(len(self.history), 0)
        self.assertTrue(os.path.isdir(os.path.dirname(self.path)))

    def test_round_trip(self):
        self.history.add_entry(PRINTER, "A", "B")
        self.history.add_entry(FILAMENT, "PLA", "PLA+")
        self.history.add_entry(PRINTER, "B", "C")

        reloaded = RenameHistory(self.path)
        self.assertEqual(reloaded.last_load.status, "OK")
        self.assertEqual(reloaded.entries(), self.history.entries())
        self.assertEqual(reloaded.resolve(PRINTER, "A"), "C")

    def test_file_format(self):
        self.history.add_entry(PRINTER, "A", "B")
        with open(self.path, "r", encoding="utf-8") as f:
            text = f.read()
        self.assertIn('\n  "entries"', text)
        entry = json.loads(text)["entries"][0]
        self.assertEqual(set(entry), {"type", "old", "new", "timestamp"})

    def test_malformed_entry_skipped(self):
        self.write_file({"entries": [
            {"type": "printer", "old": "A", "new": "B", "timestamp": 5},
            {"type": "printer", "old": "C", "timestamp": 6},
        ]})
        result = self.history.load()
        self.assertEqual(result.status, "OK")
        self.assertEqual(result.num_loaded, 1)
        self.assertEqual(result.num_skipped, 1)
        self.assertEqual(self.history.entries(), (RenameRecord(PRINTER, "A", "B", 5),))

    def test_invalid_entries_skipped(self):
        self.write_file({"entries": [
            "not an object",
            42,
            {"type": "print", "old": "A", "new": "B"},
            {"type": "unknown", "old": "A", "new": "B"},
            {"type": "filament", "old": "", "new": "B"},
            {"type": "filament", "old": "A", "new": "A"},
            {"type": "filament", "old": 1, "new": "B"},
            {"type": "filament", "old": "A", "new": "B", "timestamp": "yesterday"},
            {"type": "filament", "old": "A", "new": "B", "extra": True},
        ]})
        result = self.history.load()
        self.assertEqual(result.num_loaded, 1)
        self.assertEqual(result.num_skipped, 8)
        self.assertEqual(self.history.entries()[0].timestamp, 0)

    def test_missing_entries_key(self):
        self.write_file({"version": 1})
        result = self.history.load()
        self.assertEqual(result.status, "OK")
        self.assertEqual(len(self.history), 0)

    def test_corrupt_file(self):
        self.write_file("{ this is not json")
        result = self.history.load()
        self.assertEqual(result.status, "ERROR")
        self.assertEqual(len(self.history), 0)

    def test_wrong_shape(self):
        self.write_file([1, 2, 3])
        self.assertEqual(self.history.load().status, "ERROR")
        self.write_file({"entries": {"old": "A"}})
        self.assertEqual(self.history.load().status, "ERROR")
        self.assertEqual(len(self.history), 0)

    def test_non_finite_timestamp_skipped(self):
        self.write_file(
            '{"entries": ['
            '{"type": "printer", "old": "A", "new": "B", "timestamp": NaN},'
            '{"type": "printer", "old": "C", "new": "D", "timestamp": 1e400},'
            '{"type": "printer", "old": "E", "new": "F", "timestamp": -Infinity},'
            '{"type": "printer", "old": "G", "new": "H", "timestamp": 7}'
            ']}'
        )
        history = RenameHistory(self.path)
        self.assertEqual(history.last_load.status, "OK")
        self.assertEqual(history.last_load.num_skipped, 3)
        self.assertEqual(history.entries(), (RenameRecord(PRINTER, "G", "H", 7),))

    def test_deeply_nested_file(self):
        depth = 100000
        self.write_file('{"entries": ' + "[" * depth + "]" * depth + "}")
        history = RenameHistory(self.path)
        self.assertEqual(history.last_load.status, "ERROR")
        self.assertEqual(len(history), 0)

    def test_load_replaces_memory(self):
        self.history.add_entry(PRINTER, "A", "B")
        self.write_file({"entries": []})
        self.history.load()
        self.assertEqual(len(self.history), 0)
        self.assertIsNone(self.history.resolve(PRINTER, "A"))

    def test_unknown_type_saved_as_unknown(self):
        self.assertEqual(RenameRecord(PresetType.INVALID, "A", "B").to_json()["type"], "unknown")

    def test_save_failure_keeps_memory(self):
        """An unwritable location loses durability, not the rename."""
        blocker = os.path.join(self._temp_dir, "blocker")
        with open(blocker, "w", encoding="utf-8") as f:
            f.write("a file, not a folder")
        history = RenameHistory(os.path.join(blocker, "rename_history.json"))

        history.add_entry(FILAMENT, "A", "B")
        self.assertEqual(history.last_save.status, "ERROR")
        self.assertTrue(history.last_save.error_message)
        self.assertEqual(history.resolve(FILAMENT, "A"), "B")

    def test_save_overwrites(self):
        self.write_file({"entries": [
            {"type": "printer", "old": "A", "new": "B", "timestamp": 1},
            {"type": "printer", "old": "bad"},
        ]})
        history = RenameHistory(self.path)
        history.add_entry(PRINTER, "B", "C")
        self.assertEqual(len(self.read_file()["entries"]), 2)


if __name__ == "__main__":
    unittest.main()
