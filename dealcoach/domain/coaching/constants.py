"""
COACHING CONSTANTS

Fixed thresholds shared by the stats aggregator, the coaching rules and the
upsell gate. Runtime-tunable values live in dealcoach.config; these are the
product rules themselves.
"""

# -------------------------------------------------------------------
# Pacing
# -------------------------------------------------------------------

# |pace_delta| at or beyond this is AHEAD / BEHIND, inside is ON_TRACK
PACE_DEAD_ZONE = 1.0

# -------------------------------------------------------------------
# Momentum (drought) tracking
# -------------------------------------------------------------------

DROUGHT_WINDOW_DAYS = 7
MOMENTUM_ALERT_DAYS = 3

# -------------------------------------------------------------------
# Free tier
# -------------------------------------------------------------------

FREE_DEAL_LIMIT = 10
PRO_PRICE_LABEL = "$9.99/mo"

# -------------------------------------------------------------------
# Time-of-day slots (local hour boundaries)
# -------------------------------------------------------------------

MIDDAY_START_HOUR = 12
EVENING_START_HOUR = 17

FALLBACK_TEXT = "Keep pushing toward your goals today!"
