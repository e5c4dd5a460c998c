"""
Spot availability for offerings.

All "how many seats are left" questions go through here so that the
catalog, the client's pre-booking check and the optional server-side
capacity check agree.
"""

from typing import Callable, Optional

from ..models.offering import Offering


FEW_SPOTS_THRESHOLD = 3


def available_spots(offering: Offering) -> int:
    """
    Capacity minus taken spots.

    Negative when the offering is overbooked.

    Examples:
        >>> available_spots(course)  # capacity 12, enrolled_count 8
        4
    """
    return offering.capacity - offering.taken_spots


def is_fully_booked(offering: Offering) -> bool:
    return available_spots(offering) <= 0


def has_few_spots_left(offering: Offering) -> bool:
    """True when 1 to 3 spots remain."""
    return 0 < available_spots(offering) <= FEW_SPOTS_THRESHOLD


def make_spots_lookup(
    find_offering: Callable[[str, str], Optional[Offering]]
) -> Callable[[str, str], Optional[int]]:
    """
    Build an (item_id, item_type) -> remaining spots function.

    Args:
        find_offering: Resolver returning the offering or None

    Returns:
        Lookup returning None for unknown offerings
    """
    def lookup(item_id: str, item_type: str) -> Optional[int]:
        offering = find_offering(item_id, item_type)
        if offering is None:
            return None
        return available_spots(offering)

    return lookup
