import unittest

from plan2read.timeutil import (
    TimeRange,
    Weekday,
    first_overlap,
    format_hhmm,
    normalize_hhmm,
    to_minutes,
)


class TestTimeParsing(unittest.TestCase):
    def test_to_minutes(self) -> None:
        self.assertEqual(to_minutes("00:00"), 0)
        self.assertEqual(to_minutes("09:30"), 570)
        self.assertEqual(to_minutes("23:59"), 23 * 60 + 59)

    def test_rejects_malformed_times(self) -> None:
        for bad in ("", "9", "24:00", "12:60", "ab:cd", "12:5"):
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    to_minutes(bad)

    def test_normalize_pads_single_digit_hours(self) -> None:
        # "9:00" sorts after "10:00" as a string; normalised form does not
        self.assertEqual(normalize_hhmm("9:05"), "09:05")
        self.assertLess(normalize_hhmm("9:00"), normalize_hhmm("10:00"))
        self.assertEqual(format_hhmm(605), "10:05")


class TestWeekday(unittest.TestCase):
    def test_parse_is_case_insensitive(self) -> None:
        self.assertIs(Weekday.parse("monday"), Weekday.MONDAY)
        self.assertIs(Weekday.parse(" Sunday "), Weekday.SUNDAY)
        self.assertIs(Weekday.parse(Weekday.FRIDAY), Weekday.FRIDAY)

    def test_parse_unknown(self) -> None:
        with self.assertRaises(ValueError):
            Weekday.parse("Funday")

    def test_order_is_monday_first(self) -> None:
        self.assertEqual([d.value for d in Weekday][0], "Monday")
        self.assertEqual(len(list(Weekday)), 7)


class TestTimeRange(unittest.TestCase):
    def test_touching_ranges_do_not_overlap(self) -> None:
        a = TimeRange.from_strings("10:00", "11:00")
        b = TimeRange.from_strings("11:00", "12:00")
        self.assertFalse(a.overlaps(b))
        self.assertFalse(b.overlaps(a))

    def test_partial_and_nested_overlap(self) -> None:
        a = TimeRange.from_strings("10:00", "11:00")
        self.assertTrue(a.overlaps(TimeRange.from_strings("10:30", "11:30")))
        self.assertTrue(a.overlaps(TimeRange.from_strings("10:15", "10:45")))
        self.assertTrue(a.overlaps(TimeRange.from_strings("09:00", "12:00")))

    def test_empty_range(self) -> None:
        self.assertTrue(TimeRange.from_strings("09:00", "09:00").is_empty)
        self.assertTrue(TimeRange.from_strings("10:00", "09:00").is_empty)
        self.assertFalse(TimeRange.from_strings("09:00", "09:01").is_empty)

    def test_first_overlap(self) -> None:
        existing = [
            ("a", TimeRange.from_strings("08:00", "09:00")),
            ("b", TimeRange.from_strings("10:00", "11:00")),
        ]
        self.assertEqual(first_overlap(TimeRange.from_strings("10:30", "12:00"), existing), "b")
        self.assertIsNone(first_overlap(TimeRange.from_strings("09:00", "10:00"), existing))


if __name__ == "__main__":
    unittest.main()
