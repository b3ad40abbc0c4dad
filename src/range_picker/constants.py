"""
Range Picker Constants

Default values shared by the selection engine and its rendering collaborators.
"""

# Week day labels indexed like week_starts_on (0 = Sunday ... 6 = Saturday)
DEFAULT_WEEK_DAYS = ('Su', 'Mo', 'Tu', 'We', 'Th', 'Fr', 'Sa')

DEFAULT_MONTH_FORMAT = "%B %Y"

# Range highlight color
DEFAULT_COLOR = "#3d91ff"

DEFAULT_RANGE_KEY = "selection"

# One animation frame
DEFAULT_DEBOUNCE_MS = 16

# Six full weeks so every month renders at the same height
CALENDAR_GRID_DAYS = 42

MIN_DISPLAYED_MONTHS = 1
MAX_DISPLAYED_MONTHS = 12
