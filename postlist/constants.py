"""
Application-level constants for hardcoded business logic.

These values define the request contract of the listing engine and should
NEVER be changed via environment variables. For tunable values (pool sizes,
estimation threshold, timeouts), see postlist/settings.py.
"""

# ============================================================================
# Pagination Safety Limits
# ============================================================================

# Smallest page a caller may request
MIN_PAGE_SIZE = 1

# Maximum allowed page size to prevent excessive database loads
# For default page size, see postlist/settings.py (DEFAULT_PAGE_SIZE)
MAX_PAGE_SIZE = 100

# First page number for offset pagination (1-based)
FIRST_PAGE = 1


# ============================================================================
# Count Cache
# ============================================================================

# Redis key prefix for cached offset-pagination totals
COUNT_CACHE_KEY_PREFIX = "pagination:count"


# ============================================================================
# Logging
# ============================================================================

# Maximum size of a single JSON log line written to the error log file
MAX_LOG_LINE_BYTES = 100_000
