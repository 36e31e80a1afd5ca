"""
Application constants.
"""

# Slugs
SLUG_MAX_LENGTH = 190
DEFAULT_POST_SLUG = "post"
FIRST_SLUG_SUFFIX = 2

# Listings
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
NAME_LIST_SEPARATOR = ", "

# Local wall-clock format used in postmeta values
LOCAL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
