"""Application-wide constants.

These are fixed values that don't change between environments.
For configurable values, see config.py Settings.
"""

# ─────────────────────────────────────────────────────────────
# API Rate Limits (external constraints)
# ─────────────────────────────────────────────────────────────
EODHD_RATE_LIMIT_CALLS_PER_MINUTE = 1000
EODHD_REQUESTS_PER_SYMBOL = 2  # earnings calendar + daily prices
DEFAULT_BATCH_SIZE = 900  # leaves headroom under the per-minute ceiling
DEFAULT_BATCH_COOLDOWN_SECONDS = 60.0  # one full rate window
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_CONCURRENT_REQUESTS = 100  # httpx default pool size

# ─────────────────────────────────────────────────────────────
# Cache
# ─────────────────────────────────────────────────────────────
EARNINGS_CACHE_PREFIX = "earnings"
EARNINGS_CACHE_TTL_SECONDS = 2592000  # 30 days

# ─────────────────────────────────────────────────────────────
# Estimation
# ─────────────────────────────────────────────────────────────
PRICE_LOOKBACK_ATTEMPTS = 5  # target day + 4 prior calendar days
MIN_PRICE_POINTS = 10
DEFAULT_HISTORY_YEARS = 2
DEFAULT_LOOKAHEAD_YEARS = 1
MOVE_DECIMAL_PLACES = 2

# ─────────────────────────────────────────────────────────────
# API URL Defaults (used as defaults in Settings)
# ─────────────────────────────────────────────────────────────
DEFAULT_EODHD_API_URL = "https://eodhd.com/api"
DEFAULT_EXCHANGE = "US"
DEFAULT_SCHEDULE_CRON = "0 6 * * 1-5"
