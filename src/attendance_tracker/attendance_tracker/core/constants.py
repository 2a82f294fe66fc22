"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_USER_ID = "user_001"
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 5

# X-User-Id header selects the subject of an attendance request.
USER_ID_HEADER = "X-User-Id"
USER_ID_MAX_LENGTH = 64

# MySQL ER_DUP_ENTRY
MYSQL_DUPLICATE_KEY = 1062
