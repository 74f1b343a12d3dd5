from __future__ import annotations

# Down & distance
FIRST_AND_TEN_YTG = 10
MAX_DOWN = 4
SHORT_GAIN_YARDS = 3     # below this a non-explosive snap counts as unsuccessful

# Field context
MAX_YARDLINE = 100
MIN_YARDLINE = 0
KICKOFF_YARDLINE = 65    # receiving team after a score
TOUCHBACK_YARDLINE = 80

# Dice
ROLL_MIN = 1
ROLL_MAX = 100

# Yardage sampler
Z_CLAMP = 10.0

# Stamina / percentile bounds
PERCENTILE_MIN = 0.0
PERCENTILE_MAX = 100.0

# Clock
QUARTER_LENGTH = "15:00"
REGULATION_QUARTERS = 4
TIMEOUTS_PER_HALF = 3

TEAMS = ("home", "away")
