"""Tests for resumedoc/dates.py."""

from __future__ import annotations

import math
import unittest

from resumedoc.dates import parse_date_value, parse_month


class TestParseDateValue(unittest.TestCase):
    """Tests for parse_date_value()."""

    def test_ongoing_sorts_last(self):
        self.assertEqual(parse_date_value("Present"), math.inf)
        self.assertGreater(parse_date_value("current"), parse_date_value("2099"))

    def test_missing_or_garbage_is_zero(self):
        for raw in (None, "", "   ", "sometime", "Foo 2020", "2021-13"):
            with self.subTest(raw=raw):
                self.assertEqual(parse_date_value(raw), 0.0)

    def test_equivalent_shapes(self):
        march = parse_date_value("2021-03")
        self.assertEqual(parse_date_value("03/2021"), march)
        self.assertEqual(parse_date_value("March 2021"), march)
        self.assertEqual(parse_date_value("Mar. 2021"), march)

    def test_month_day_year(self):
        self.assertEqual(parse_date_value("Jan 15, 2022"), parse_date_value("2022-01-15"))
        self.assertGreater(parse_date_value("March 3 2021"), parse_date_value("Mar 2021"))

    def test_year_equals_january(self):
        self.assertEqual(parse_date_value("2021"), parse_date_value("Jan 2021"))

    def test_ordering(self):
        values = ["2019", "Sept 2020", "2020-06-15", "Present", "2021"]
        ordered = sorted(values, key=parse_date_value)
        self.assertEqual(ordered, ["2019", "2020-06-15", "Sept 2020", "2021", "Present"])


class TestMonthHelpers(unittest.TestCase):
    """Tests for parse_month()."""

    def test_parse_month(self):
        self.assertEqual(parse_month("Sep."), 9)
        self.assertEqual(parse_month("december"), 12)
        self.assertIsNone(parse_month("xyz"))


if __name__ == "__main__":
    unittest.main()
