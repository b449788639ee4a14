"""
Tests for seat recommendation.
"""

import unittest

from route_ga.data_models import SeatPreference
from route_ga.errors import InvalidConfigurationError
from route_ga.seats import (
    SeatClass,
    classify_seat,
    is_aisle_seat,
    is_window_seat,
    recommend_seats,
    seat_map,
)


class TestSeatClassification(unittest.TestCase):
    """Test the fixed 2+2 layout convention."""

    def test_first_row(self):
        """Test seats 1-4 classification (seat % 4)."""
        self.assertEqual([classify_seat(s) for s in (1, 2, 3, 4)],
                         [SeatClass.AISLE, SeatClass.AISLE, SeatClass.WINDOW, SeatClass.WINDOW])

    def test_window_and_aisle_partition_seats(self):
        """Test every seat is exactly one of window or aisle."""
        for seat in range(1, 101):
            self.assertNotEqual(is_window_seat(seat), is_aisle_seat(seat))


class TestRecommendSeats(unittest.TestCase):
    """Test seat recommendation filtering."""

    def test_window_preference(self):
        """Test window seats in ascending order, first-fit."""
        prefs = SeatPreference(wants_window=True, wants_aisle=False, count=2)

        self.assertEqual(recommend_seats(prefs, 8, {3}), [4, 7])

    def test_aisle_preference(self):
        """Test aisle filtering skips occupied seats."""
        prefs = SeatPreference(wants_aisle=True, count=3)

        self.assertEqual(recommend_seats(prefs, 12, [1, 6]), [2, 5, 9])

    def test_contradictory_preferences(self):
        """Test window and aisle together yield nothing."""
        prefs = SeatPreference(wants_window=True, wants_aisle=True, count=1)

        with self.assertLogs('route_ga.seats', level='WARNING'):
            self.assertEqual(recommend_seats(prefs, 40, set()), [])

    def test_no_preference(self):
        """Test any free seat qualifies without filters."""
        prefs = SeatPreference(count=3)

        self.assertEqual(recommend_seats(prefs, 10, {1, 2}), [3, 4, 5])

    def test_fewer_seats_than_requested(self):
        """Test a short list is returned instead of an error."""
        prefs = SeatPreference(wants_window=True, count=5)

        self.assertEqual(recommend_seats(prefs, 8, {4, 8}), [3, 7])
        self.assertEqual(recommend_seats(prefs, 4, {3, 4}), [])

    def test_zero_count(self):
        """Test count 0 returns an empty list."""
        self.assertEqual(recommend_seats(SeatPreference(count=0), 10, []), [])

    def test_occupied_outside_range_ignored(self):
        """Test occupied numbers beyond the bus are harmless."""
        prefs = SeatPreference(count=2)

        self.assertEqual(recommend_seats(prefs, 3, {99, -1}), [1, 2])

    def test_invalid_total(self):
        """Test non-positive total_seats is rejected."""
        with self.assertRaises(InvalidConfigurationError):
            recommend_seats(SeatPreference(), 0, [])


class TestSeatMap(unittest.TestCase):
    """Test seat map description."""

    def test_seat_map(self):
        """Test rows, columns, classes and occupancy."""
        layout = seat_map(6, [5])

        self.assertEqual(len(layout), 6)
        self.assertEqual(layout[0], {'seat': 1, 'row': 1, 'column': 1, 'class': 'aisle', 'occupied': False})
        self.assertEqual(layout[3]['class'], 'window')
        self.assertEqual(layout[4]['row'], 2)
        self.assertTrue(layout[4]['occupied'])

    def test_seat_map_invalid_total(self):
        """Test non-positive total_seats is rejected."""
        with self.assertRaises(InvalidConfigurationError):
            seat_map(-2, [])


if __name__ == '__main__':
    unittest.main()
