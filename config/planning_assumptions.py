# =============================================================================
# Planning assumptions used by the calculation engine
# =============================================================================

# Contribution limits (caller-supplied; these are only the fallbacks)
DEFAULT_CONTRIBUTION_LIMIT_401K = 24_500.0   # employee deferral limit
DEFAULT_IRA_LIMIT = 7_500.0

MONTHS_PER_YEAR = 12

# Contribution percentages are rounded to this many decimals before being
# rounded up to the next whole percent (3.0000000000000004% stays 3%)
PERCENT_ROUNDING_DIGITS = 9

# A bucket total at or below this many dollars counts as depleted
DEPLETION_TOLERANCE = 1.0
