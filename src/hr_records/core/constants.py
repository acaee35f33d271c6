"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EMPLOYEES_PAGE_SIZE = 4
MINIMUM_EMPLOYEE_AGE = 18
HOURS_DISPLAY_DECIMALS = 2

EMPLOYEE_SORT_FIELDS = ("id", "full_name", "position")

# <input type="datetime-local"> value format
LOCAL_INPUT_FORMAT = "%Y-%m-%dT%H:%M"
# Table and calendar event format
DISPLAY_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
