"""
Availability engine: weekly windows -> dated candidate slots -> free slots.

- slots: window parsing, TimeSlotRange (30m step, 60m sessions), conflict filter.
- calculator: bookable dates in a range, free slots on one date.
"""

from mentorship.services.availability.calculator import (
    AvailableWeekday,
    available_slots,
    available_weekdays,
    deduplicate_slots,
)
from mentorship.services.availability.slots import (
    AvailabilityWindow,
    TimeSlot,
    TimeSlotRange,
    Weekday,
    filter_conflicts,
    generate_time_slots,
)

__all__ = [
    "AvailabilityWindow",
    "AvailableWeekday",
    "TimeSlot",
    "TimeSlotRange",
    "Weekday",
    "available_slots",
    "available_weekdays",
    "deduplicate_slots",
    "filter_conflicts",
    "generate_time_slots",
]
