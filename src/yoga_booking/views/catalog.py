"""
Student-facing catalog of bookable offerings.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Literal, Optional

from ..models.offering import Course, Event, ItemType, Offering, YogaClass
from .availability import available_spots


CatalogFilter = Literal["all", "single", "course", "event"]
CatalogSort = Literal["date", "price"]


@dataclass
class CatalogItem:
    """
    One offering as shown in the catalog.

    Attributes:
        item_type: "single", "course" or "event"
        offering: Source offering
        display_date: Class/event date or course start date
        available_spots: Spots left (may be negative when overbooked)
    """

    item_type: ItemType
    offering: Offering
    display_date: datetime
    available_spots: int

    @property
    def name(self) -> str:
        return self.offering.name

    @property
    def price(self) -> float:
        return self.offering.price

    @property
    def is_bookable(self) -> bool:
        return self.available_spots > 0


def to_catalog_item(offering: Offering) -> CatalogItem:
    return CatalogItem(
        item_type=offering.item_type,
        offering=offering,
        display_date=offering.display_date,
        available_spots=available_spots(offering),
    )


def _matches(item: CatalogItem, needle: str) -> bool:
    offering = item.offering
    if needle in offering.name.lower():
        return True
    if offering.description and needle in offering.description.lower():
        return True
    return any(needle in tag.lower() for tag in offering.tags or [])


def browse_offerings(
    classes: List[YogaClass],
    courses: List[Course],
    events: List[Event],
    item_type: CatalogFilter = "all",
    search: Optional[str] = "",
    sort_by: CatalogSort = "date"
) -> List[CatalogItem]:
    """
    Combine, filter and sort offerings for browsing.

    Args:
        classes: Single classes
        courses: Courses
        events: Events
        item_type: "all" or one item type
        search: Case-insensitive match on name, description or any tag
        sort_by: "date" (ascending display date) or "price" (ascending)

    Returns:
        List of CatalogItem
    """
    items = [to_catalog_item(o) for o in list(classes) + list(courses) + list(events)]

    if item_type != "all":
        items = [item for item in items if item.item_type == item_type]

    if search:
        needle = search.lower()
        items = [item for item in items if _matches(item, needle)]

    if sort_by == "price":
        items.sort(key=lambda item: item.price)
    else:
        items.sort(key=lambda item: item.display_date)

    return items
