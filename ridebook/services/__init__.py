"""Business logic services for Ridebook."""

# Service modules are imported individually where needed
# to avoid circular imports

__all__ = [
    "availability",
    "booking",
    "date_exception",
    "manual_booking",
    "schedule",
]
