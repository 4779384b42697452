import math
import unittest

import numpy as np

from echem_LogReporter.core.axes import MISSING, pick_indices, select_axes
from echem_LogReporter.core.classify import DEFAULT_RULES, detect_mode, rules_from_config
from echem_LogReporter.core.metrics import format_sci, mean, series_metrics
from echem_LogReporter.core.model import ExperimentMode
from echem_LogReporter.core.table import (
    extract_table,
    is_header_line,
    is_numeric_data_line,
    parse_numeric_row,
    split_lines,
    table_to_frame,
)


class ModeDetectionTests(unittest.TestCase):
    def test_no_marker_is_unknown(self):
        self.assertIs(ExperimentMode.UNKNOWN, detect_mode(["Operator: A", "t(s) i(A)", "0 1"]))

    def test_each_marker(self):
        self.assertIs(ExperimentMode.POTENTIOSTATIC, detect_mode(["ID_PotStatic run"]))
        self.assertIs(ExperimentMode.CYCLIC_VOLTAMMETRY, detect_mode(["Technique ID_CycVolt"]))
        self.assertIs(ExperimentMode.CHRONOAMPEROMETRY, detect_mode(["CHRONOAMPEROMETRY step"]))

    def test_potentiostatic_marker_is_case_sensitive(self):
        self.assertIs(ExperimentMode.UNKNOWN, detect_mode(["id_potstatic run"]))

    def test_last_trigger_wins_ca_then_cv(self):
        lines = ["Chronoamperometry setup", "notes", "ID_CycVolt sweep"]
        self.assertIs(ExperimentMode.CYCLIC_VOLTAMMETRY, detect_mode(lines))

    def test_last_trigger_wins_cv_then_ca(self):
        lines = ["ID_CycVolt sweep", "notes", "Chronoamperometry setup"]
        self.assertIs(ExperimentMode.CHRONOAMPEROMETRY, detect_mode(lines))

    def test_rule_order_decides_within_one_line(self):
        # a line carrying both markers resolves to the later rule
        self.assertIs(ExperimentMode.CYCLIC_VOLTAMMETRY, detect_mode(["ID_CycVolt after ID_PotStatic"]))

    def test_marker_override_from_config(self):
        rules = rules_from_config({"classification": {"markers": {"cyclic_voltammetry": "CV_MODE"}}})
        self.assertIs(ExperimentMode.CYCLIC_VOLTAMMETRY, detect_mode(["CV_MODE"], rules))
        self.assertIs(ExperimentMode.UNKNOWN, detect_mode(["ID_CycVolt"], rules))
        self.assertEqual(DEFAULT_RULES, rules_from_config({}))


class LinePredicateTests(unittest.TestCase):
    def test_header_needs_parenthesized_unit(self):
        self.assertTrue(is_header_line("t(s) i(A)"))
        self.assertTrue(is_header_line("Time (s)  Current"))
        self.assertFalse(is_header_line("Time s Current A"))

    def test_numeric_prefix(self):
        for line in ["0.0 1.0", "-1e-3 2", "+.5 3", "  12 13", "3.2E+04"]:
            self.assertTrue(is_numeric_data_line(line), line)
        for line in ["t(s) i(A)", "ID_PotStatic", "", "e5 1"]:
            self.assertFalse(is_numeric_data_line(line), line)

    def test_parse_row_all_or_nothing(self):
        self.assertEqual((1.0, -2.5e-3), parse_numeric_row("1.0   -2.5e-3"))
        self.assertIsNone(parse_numeric_row("1.0 abc 3.0"))
        self.assertIsNone(parse_numeric_row("1.0 nan"))
        self.assertIsNone(parse_numeric_row("1.0 inf"))
        # float() accepts these, but they are not plain decimals
        self.assertIsNone(parse_numeric_row("1_000 2"))
        self.assertIsNone(parse_numeric_row("0 ١٢"))
        self.assertIsNone(parse_numeric_row("1.0 0x10"))
        self.assertIsNone(parse_numeric_row("1.0 1e999"))

    def test_non_ascii_digits_are_not_numeric(self):
        self.assertFalse(is_numeric_data_line("١٢ 3"))
        self.assertFalse(is_numeric_data_line("²3 4"))


class TableExtractionTests(unittest.TestCase):
    def test_first_header_wins(self):
        lines = ["Meta", "t(s) i(A)", "0 1", "U(V) I(mA)", "1 2"]
        header, table = extract_table(lines)
        self.assertEqual(("t(s)", "i(A)"), header)
        self.assertEqual(((0.0, 1.0), (1.0, 2.0)), table)

    def test_malformed_rows_dropped(self):
        lines = ["t(s) i(A)", "0 1", "1 x", "2 3", "", "3 4 5"]
        _, table = extract_table(lines)
        self.assertEqual(3, len(table))
        self.assertEqual((3.0, 4.0, 5.0), table[-1])

    def test_no_header_still_reads_numbers(self):
        header, table = extract_table(["Operator", "1 2", "3 4"])
        self.assertEqual((), header)
        self.assertEqual(((1.0, 2.0), (3.0, 4.0)), table)

    def test_numeric_lines_before_header_are_data(self):
        header, table = extract_table(["0.5 0.6", "t(s) i(A)", "1 2"])
        self.assertEqual(("t(s)", "i(A)"), header)
        self.assertEqual(2, len(table))

    def test_no_numeric_rows(self):
        header, table = extract_table(["t(s) i(A)", "end of file"])
        self.assertEqual(("t(s)", "i(A)"), header)
        self.assertEqual((), table)

    def test_crlf_and_cr_line_endings(self):
        lines = split_lines("t(s) i(A)\r\n0 1\r\n1 2\r2 3")
        _, table = extract_table(lines)
        self.assertEqual(3, len(table))

    def test_only_cr_and_lf_break_lines(self):
        # \x85 (latin-1 NEL) and \x0c stay inside the line
        self.assertEqual(["a\x85b", "c\x0cd e", ""], split_lines("a\x85b\r\nc\x0cd e\n"))

    def test_underscore_and_unicode_digit_rows_dropped(self):
        _, table = extract_table(["t(s) i(A)", "1_000 2", "١٢ 3", "0 1"])
        self.assertEqual(((0.0, 1.0),), table)

    def test_table_to_frame_pads_short_rows(self):
        df = table_to_frame(("t(s)", "i(A)"), ((0.0, 1.0), (1.0,), (2.0, 3.0, 4.0)))
        self.assertEqual(["t(s)", "i(A)", "col_3"], list(df.columns))
        self.assertTrue(math.isnan(df.iloc[1, 1]))
        self.assertEqual(4.0, df.iloc[2, 2])


class AxisSelectionTests(unittest.TestCase):
    def test_last_match_wins(self):
        self.assertEqual((1, 3), pick_indices(("t1", "t2", "i1", "i2")))

    def test_defaults_without_header(self):
        sel = select_axes((), ((0.0, 1.0), (1.0, 2.0)))
        self.assertEqual((0, 1), (sel.x_index, sel.y_index))
        self.assertEqual(("col 1", "col 2"), (sel.x_label, sel.y_label))
        np.testing.assert_allclose(sel.y, [1.0, 2.0])

    def test_label_with_both_letters(self):
        # 'Time' holds t and i, 'Current' only t
        self.assertEqual((1, 0), pick_indices(("Time(s)", "Current(A)")))

    def test_narrow_rows_are_dropped(self):
        sel = select_axes(("t(s)", "i(A)"), ((0.0, 1.0), (5.0,), (2.0, 3.0)))
        self.assertEqual(1, sel.n_dropped)
        np.testing.assert_allclose(sel.x, [0.0, 2.0])
        np.testing.assert_allclose(sel.y, [1.0, 3.0])
        self.assertTrue(math.isnan(MISSING))


class StatisticsTests(unittest.TestCase):
    def test_mean_and_format(self):
        self.assertEqual(2.0, mean([1.0, 2.0, 3.0]))
        self.assertEqual("2.000e+00", format_sci(mean([1.0, 2.0, 3.0])))
        self.assertEqual("1.500e-03", format_sci(1.5e-3))

    def test_empty_mean_raises(self):
        with self.assertRaises(ValueError):
            mean([])

    def test_series_metrics(self):
        m = series_metrics([0.0, 1.0, 2.0], [4.0, 2.0, 6.0], "run1")
        self.assertEqual(3, m["n_points"])
        self.assertEqual(2.0, m["min"])
        self.assertEqual(6.0, m["max"])
        self.assertEqual(2.0, m["x_end"])


if __name__ == "__main__":
    unittest.main()
