from __future__ import annotations

PERIODS_PER_YEAR: dict[str, int] = {
    "weekly": 52,
    "monthly": 12,
    "quarterly": 4,
    "yearly": 1,
}

# seasonality period sent to the stats backend as `s`
SEASON_TYPES: dict[str, int] = {
    "weekly": 4,
    "monthly": 3,
    "quarterly": 2,
    "yearly": 1,
}

MONTH_TOKENS: dict[str, str] = {
    "Jan": "01", "Feb": "02", "Mar": "03", "Apr": "04",
    "May": "05", "Jun": "06", "Jul": "07", "Aug": "08",
    "Sep": "09", "Oct": "10", "Nov": "11", "Dec": "12",
}

NA_SENTINEL = "NA"
