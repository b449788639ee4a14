"""
Seat recommendation over a fixed four-seats-per-row bus layout.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List

from .data_models import SeatPreference
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

SEATS_PER_ROW = 4


class SeatClass(Enum):
    """Seat position classes in a 2+2 row"""
    WINDOW = "window"
    AISLE = "aisle"


def is_window_seat(seat: int) -> bool:
    return seat % SEATS_PER_ROW in (0, 3)


def is_aisle_seat(seat: int) -> bool:
    return seat % SEATS_PER_ROW in (1, 2)


def classify_seat(seat: int) -> SeatClass:
    """Window or aisle class of a 1-indexed seat number."""
    return SeatClass.WINDOW if is_window_seat(seat) else SeatClass.AISLE


def recommend_seats(preferences: SeatPreference,
                    total_seats: int,
                    occupied: Iterable[int]) -> List[int]:
    """
    Recommend free seats matching the passenger's preferences.

    Candidates are seats 1..total_seats that are not occupied. Window and
    aisle filters apply independently, so asking for both always yields an
    empty list. Seats are returned first-fit in ascending order; fewer than
    preferences.count seats (possibly none) is not an error.

    Args:
        preferences: Window/aisle filters and the number of seats wanted
        total_seats: Number of seats on the bus
        occupied: Seat numbers already taken

    Returns:
        Ascending list of at most preferences.count seat numbers

    Raises:
        InvalidConfigurationError: If total_seats is not positive
    """
    if total_seats <= 0:
        raise InvalidConfigurationError(f"'total_seats' must be positive, got: {total_seats}")

    if preferences.wants_window and preferences.wants_aisle:
        logger.warning("Both window and aisle seats requested; no seat can satisfy both")

    taken = set(occupied)
    recommended = []
    for seat in range(1, total_seats + 1):
        if len(recommended) >= preferences.count:
            break
        if seat in taken:
            continue
        if preferences.wants_window and not is_window_seat(seat):
            continue
        if preferences.wants_aisle and not is_aisle_seat(seat):
            continue
        recommended.append(seat)

    logger.debug("Recommended seats %s for %s", recommended, preferences)
    return recommended


def seat_map(total_seats: int, occupied: Iterable[int]) -> List[Dict[str, Any]]:
    """
    Describe every seat for a seat picker.

    Args:
        total_seats: Number of seats on the bus
        occupied: Seat numbers already taken

    Returns:
        One dict per seat with seat, row, column (1-based), class and occupied
    """
    if total_seats <= 0:
        raise InvalidConfigurationError(f"'total_seats' must be positive, got: {total_seats}")

    taken = set(occupied)
    return [
        {
            'seat': seat,
            'row': (seat - 1) // SEATS_PER_ROW + 1,
            'column': (seat - 1) % SEATS_PER_ROW + 1,
            'class': classify_seat(seat).value,
            'occupied': seat in taken,
        }
        for seat in range(1, total_seats + 1)
    ]
