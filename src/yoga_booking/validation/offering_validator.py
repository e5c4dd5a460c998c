"""
Offering validator.

Validates classes, courses and events against the studio's business rules.
"""

from typing import Any

from ..models.offering import ITEM_TYPES
from .validators import ValidationResult, Validator, as_dict


class OfferingValidator(Validator):
    """
    Validator for classes, courses and events.

    Validates:
    - Required fields per item type
    - Capacity, duration and price ranges
    - HH:MM start times
    - Spot counter against capacity

    An overbooked offering is a warning, not an error: bookings are not
    capped by capacity, so the studio can legitimately end up there.

    Examples:
        >>> validator = OfferingValidator()
        >>> result = validator.validate(course)
        >>> if result.has_warnings:
        ...     print(result.get_summary())
    """

    COMMON_FIELDS = ["id", "teacher_id", "name", "duration", "capacity", "price", "location"]

    FIELDS_BY_TYPE = {
        "single": ["date", "start_time", "booked_count"],
        "course": ["start_date", "number_of_weeks", "recurring_time", "enrolled_count"],
        "event": ["date", "start_time", "event_type", "booked_count"],
    }

    MAX_DURATION = 480  # minutes

    def validate(self, data: Any) -> ValidationResult:
        """
        Validate one offering.

        Args:
            data: YogaClass, Course or Event (or its dictionary form)

        Returns:
            ValidationResult with errors and warnings
        """
        data = as_dict(data)
        result = ValidationResult()

        item_type = data.get("item_type")
        error = self.validate_choice(item_type, ITEM_TYPES, "item_type")
        if error:
            return result.add_error(error)

        required = self.COMMON_FIELDS + self.FIELDS_BY_TYPE[item_type]
        for error in self.validate_required_fields(data, required):
            result.add_error(error)

        if not result.is_valid:
            return result

        result.add_if(self.validate_string_length(data["name"], "name", min_length=1, max_length=200))
        result.add_if(self.validate_positive_number(data["capacity"], "capacity"))
        result.add_if(self.validate_non_negative_number(data["price"], "price"))

        error = self.validate_positive_number(data["duration"], "duration")
        if error:
            result.add_error(error)
        elif data["duration"] > self.MAX_DURATION:
            result.add_warning(
                f"Duration unusually long: {data['duration']} minutes "
                f"(maximum recommended: {self.MAX_DURATION})"
            )

        if item_type == "course":
            result.add_if(self.validate_time_format(data["recurring_time"], "recurring_time"))
            result.add_if(self.validate_positive_number(data["number_of_weeks"], "number_of_weeks"))
            day = data.get("recurring_day_of_week")
            if not isinstance(day, int) or not 0 <= day <= 6:
                result.add_error(f"recurring_day_of_week must be 0-6, got {day}")
            counter_field = "enrolled_count"
        else:
            result.add_if(self.validate_time_format(data["start_time"], "start_time"))
            counter_field = "booked_count"

        taken = data[counter_field]
        if taken < 0:
            result.add_error(f"{counter_field} must not be negative, got {taken}")
        elif isinstance(data["capacity"], int) and taken > data["capacity"]:
            result.add_warning(
                f"Overbooked: {counter_field} {taken} exceeds capacity {data['capacity']}"
            )

        return result
