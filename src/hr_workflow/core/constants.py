"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LATE_GRACE_MINUTES = 5
DEFAULT_EFFICIENCY_CEILING = 150

LEAVE_TYPES = ("Sick Leave", "Casual Leave", "Emergency Leave", "Loss of Pay")
