import unittest
from activities.logic.schedule.time_ranges import parse_minutes, parse_range, overlaps


class TestTimeRanges(unittest.TestCase):

    def test_parse_minutes_separators(self):
        self.assertEqual(parse_minutes("16:30"), 990)
        self.assertEqual(parse_minutes("16.30"), 990)
        self.assertEqual(parse_minutes("16h30"), 990)
        self.assertIsNone(parse_minutes("half past four"))

    def test_parse_range(self):
        self.assertEqual(parse_range("12:30–13:30"), (750, 810))
        self.assertEqual(parse_range("12:30 - 13:30"), (750, 810))

    def test_malformed_ranges(self):
        self.assertIsNone(parse_range(None))
        self.assertIsNone(parse_range(""))
        self.assertIsNone(parse_range("12:30"))
        self.assertIsNone(parse_range("12:30–13:30–14:30"))
        self.assertIsNone(parse_range("noon–13:30"))

    def test_touching_ranges_do_not_overlap(self):
        self.assertFalse(overlaps((750, 810), (810, 870)))

    def test_overlap_is_symmetric(self):
        ranges = [(750, 810), (780, 900), (810, 870), (990, 1065), (600, 1200)]
        for x in ranges:
            for y in ranges:
                self.assertEqual(overlaps(x, y), overlaps(y, x))
        self.assertTrue(overlaps((750, 810), (780, 900)))
        self.assertTrue(overlaps((600, 1200), (990, 1065)))


if __name__ == '__main__':
    unittest.main()
