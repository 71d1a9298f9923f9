"""Tests for exporting an analysis back onto a grid."""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.create_sample_workbook import SPEC_ROWS
from variation_grouping.config import Configuration
from variation_grouping.exporter import (
    SUMMARY_COLUMNS,
    export_fills,
    export_grid,
    summary_frame,
    summary_rows,
)
from variation_grouping.grouping import analyze_variations, empty_analysis
from variation_grouping.relabel import relabel_groups

SPEC_CONFIG = Configuration(feature_column=1, item_column=2, start_row=2,
                            data_start_column=3)
MAP = {"TIRE SIZE": ["16", "18"], "DRIVE TYPE": ["2WD", "4WD"]}
VARIANT = {
    "TIRE SIZE": ["16", "18"],
    "DRIVE TYPE": ["2WD", "4WD"],
    "ENGINE MODEL": ["E1", "E2"],
}


class TestExportGrid(unittest.TestCase):
    def setUp(self):
        self.analysis = analyze_variations(
            SPEC_ROWS, SPEC_CONFIG, {"MAP": MAP, "VARIANT": VARIANT})

    def test_original_rows_preserved(self):
        exported = export_grid(SPEC_ROWS, self.analysis, SPEC_CONFIG)
        self.assertEqual(exported[:len(SPEC_ROWS)], [list(r) for r in SPEC_ROWS])

    def test_one_row_per_selection(self):
        exported = export_grid(SPEC_ROWS, self.analysis, SPEC_CONFIG)
        self.assertEqual(len(exported), len(SPEC_ROWS) + 2)
        map_row, variant_row = exported[-2], exported[-1]
        self.assertEqual(map_row, [None, None, None, "A", "A", "B", "C", "A"])
        self.assertEqual(variant_row, [None, None, None, "A", "B", "C", "D", "A"])

    def test_with_labels(self):
        exported = export_grid(SPEC_ROWS, self.analysis, SPEC_CONFIG, with_labels=True)
        self.assertEqual(len(exported), len(SPEC_ROWS) + 3)
        self.assertEqual(exported[len(SPEC_ROWS)], [])
        self.assertEqual(exported[-2][1], "3 MAP")
        self.assertEqual(exported[-1][1], "4 VARIANT")
        self.assertEqual(exported[-1][3:], ["A", "B", "C", "D", "A"])

    def test_label_never_overwrites_group_id(self):
        overlap = Configuration(feature_column=3, item_column=2, start_row=2,
                                data_start_column=3)
        exported = export_grid(SPEC_ROWS, self.analysis, overlap, with_labels=True)
        self.assertEqual(exported[-2], [None, None, None, "A", "A", "B", "C", "A"])
        self.assertEqual(exported[-1][3], "A")

    def test_input_not_mutated(self):
        before = [list(r) for r in SPEC_ROWS]
        exported = export_grid(SPEC_ROWS, self.analysis, SPEC_CONFIG)
        exported[0][0] = "changed"
        self.assertEqual(SPEC_ROWS, before)
        self.assertIsNot(exported[0], SPEC_ROWS[0])

    def test_renamed_ids_exported(self):
        renamed = relabel_groups(self.analysis, {"A": "Base"}, selection="MAP")
        exported = export_grid(SPEC_ROWS, renamed, SPEC_CONFIG)
        self.assertEqual(exported[-2][3:], ["Base", "Base", "B", "C", "Base"])

    def test_empty_analysis_returns_copy(self):
        exported = export_grid(SPEC_ROWS, empty_analysis(), SPEC_CONFIG)
        self.assertEqual(exported, [list(r) for r in SPEC_ROWS])

    def test_short_rows_widened_for_ids(self):
        grid = [["T", "X", "O"], ["", "Y", "-", "O"]]
        config = Configuration(feature_column=0, start_row=0, data_start_column=2)
        analysis = analyze_variations(grid, config, {"T": ["X", "Y"]})
        exported = export_grid(grid, analysis, config)
        self.assertEqual(exported[-1], [None, None, "A", "B"])
        self.assertEqual(exported[0], ["T", "X", "O"])


class TestExportFills(unittest.TestCase):
    def test_fill_positions_match_export(self):
        analysis = analyze_variations(SPEC_ROWS, SPEC_CONFIG, {"MAP": MAP})
        fills = export_fills(SPEC_ROWS, analysis, with_labels=True)
        row = len(SPEC_ROWS) + 1
        self.assertEqual(set(fills), {(row, c) for c in range(3, 8)})
        self.assertEqual(fills[(row, 3)], analysis.group("MAP", "A").color)
        self.assertEqual(fills[(row, 5)], analysis.group("MAP", "B").color)

    def test_no_fills_for_empty(self):
        self.assertEqual(export_fills(SPEC_ROWS, empty_analysis()), {})


class TestSummary(unittest.TestCase):
    def setUp(self):
        self.analysis = analyze_variations(
            SPEC_ROWS, SPEC_CONFIG, {"MAP": MAP, "VARIANT": VARIANT})

    def test_rows(self):
        rows = summary_rows(self.analysis)
        self.assertEqual(rows[0], SUMMARY_COLUMNS)
        self.assertEqual(len(rows) - 1, len(self.analysis.groups))
        first = rows[1]
        self.assertEqual(first[:4], ["MAP", "A", "A", "O|-|O|-"])
        self.assertEqual(first[5:], [3, "D, E, H"])

    def test_frame(self):
        frame = summary_frame(self.analysis)
        self.assertEqual(list(frame.columns), SUMMARY_COLUMNS)
        self.assertEqual(len(frame), 7)
        variant = frame[frame["Selection"] == "VARIANT"]
        self.assertEqual(list(variant["Group ID"]), ["A", "B", "C", "D"])
        self.assertEqual(int(frame["Column Count"].sum()), 10)

    def test_empty_frame(self):
        frame = summary_frame(empty_analysis())
        self.assertTrue(frame.empty)
        self.assertEqual(list(frame.columns), SUMMARY_COLUMNS)


if __name__ == "__main__":
    unittest.main()
