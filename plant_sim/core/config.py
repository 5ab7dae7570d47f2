"""All tunable constants for the plant care simulation.

Every magic number in the codebase must reference this file.
"""

# =============================================================================
# TIME
# =============================================================================
MS_PER_SECOND: int = 1000
MS_PER_MINUTE: int = 60 * MS_PER_SECOND
MS_PER_HOUR: int = 60 * MS_PER_MINUTE
MS_PER_DAY: int = 24 * MS_PER_HOUR

# Day/night cycle in wall-clock milliseconds
CYCLE_DURATION_MS: int = 10 * MS_PER_MINUTE
DAYTIME_FRACTION: float = 0.7  # phase below this is day

# =============================================================================
# BOUNDS
# =============================================================================
LEVEL_MIN: float = 0.0
LEVEL_MAX: float = 100.0
GROWTH_MIN: float = 0.0
GROWTH_MAX: float = 1.0

# =============================================================================
# NEW PLANT DEFAULTS
# =============================================================================
INITIAL_GROWTH_STAGE: float = 0.1
INITIAL_HEALTH: float = 100.0
INITIAL_HAPPINESS: float = 100.0
INITIAL_WATER_LEVEL: float = 50.0
INITIAL_FERTILIZER_LEVEL: float = 50.0
INITIAL_SUN_EXPOSURE: float = 50.0

PERSONALITIES: list[str] = ["sassy", "shy", "cheerful"]
POT_TYPES: list[str] = ["basic", "round", "square", "hexagonal", "decorative"]
POT_COLORS: list[str] = [
    "terracotta", "white", "black", "blue", "green", "purple", "yellow", "pink",
]
DEFAULT_POT_TYPE: str = "basic"
DEFAULT_POT_COLOR: str = "terracotta"

# =============================================================================
# RESOURCE MODEL
# =============================================================================
SATISFACTION_FALLOFF: float = 100.0  # distance at which a factor reaches 0

# =============================================================================
# GROWTH & VITALS (per simulated hour)
# =============================================================================
GROWTH_RATE_PER_HOUR: float = 0.01
WATER_DECAY_PER_HOUR: float = 2.0
FERTILIZER_DECAY_PER_HOUR: float = 1.0
HEALTH_RATE_PER_HOUR: float = 10.0
HEALTH_NEUTRAL_FACTOR: float = 0.5   # mean factor above this heals
HAPPINESS_RATE_PER_HOUR: float = 5.0
HAPPINESS_NEUTRAL_HEALTH: float = 0.5
INTERACTION_DECAY_PER_HOUR: float = 0.2
INTERACTION_DECAY_MAX: float = 5.0
HAPPINESS_NEGLECT_FLOOR: float = 10.0  # idle decay never goes below this

# Happy streak tracking (for the "Happy Plants" achievement)
HAPPY_THRESHOLD: float = 80.0

# =============================================================================
# CARE ACTIONS
# =============================================================================
OPTIMAL_BAND_TOLERANCE: float = 15.0  # strict: distance must be < this
OPTIMAL_BAND_HAPPINESS_BONUS: float = 5.0
PRUNE_HEALTH_BONUS: float = 3.0
PRUNE_HAPPINESS_BONUS: float = 5.0
TALK_HAPPINESS_BONUS: float = 15.0

# Default amounts when a caller does not pass one
DEFAULT_WATER_AMOUNT: float = 25.0
DEFAULT_FERTILIZER_AMOUNT: float = 20.0
DEFAULT_SUNLIGHT_DELTA: float = 15.0

# =============================================================================
# RESPONSES
# =============================================================================
RESOURCE_TOO_MUCH: float = 80.0
RESOURCE_TOO_LITTLE: float = 20.0
PRUNE_TOO_EARLY_GROWTH: float = 0.3
PRUNE_OVERDUE_GROWTH: float = 0.8
TALK_LONELY_HAPPINESS: float = 40.0
TALK_CONTENT_HAPPINESS: float = 90.0

# Growth stage labels: (upper bound exclusive, label)
GROWTH_STAGE_LABELS: list[tuple[float, str]] = [
    (0.25, "Seedling"),
    (0.5, "Sprout"),
    (0.75, "Young"),
    (1.0, "Mature"),
]
FULL_GROWTH_LABEL: str = "Flourishing"

# =============================================================================
# ENVIRONMENT
# =============================================================================
DAWN_SUN_SHIFT: float = 20.0
DUSK_SUN_SHIFT: float = 20.0
CURTAIN_SUN_SHIFT: float = 20.0
GROW_LIGHT_SUN_SHIFT: float = 30.0

# =============================================================================
# ACHIEVEMENTS
# =============================================================================
GROWTH_SPURT_STAGE: float = 0.5
FULLY_GROWN_STAGE: float = 1.0
TALK_TARGET: int = 5
CARE_ACTION_TARGET: int = 50
PLANT_TYPE_TARGET: int = 3
HAPPY_STREAK_TARGET_MS: int = 3 * MS_PER_DAY
NIGHT_OWL_START_HOUR: int = 22   # inclusive
NIGHT_OWL_END_HOUR: int = 4      # inclusive (up to 04:59)
NIGHT_OWL_WINDOW_MS: int = 5 * MS_PER_MINUTE

# =============================================================================
# TICK SCHEDULER
# =============================================================================
MIN_TICK_ELAPSED_MS: float = 1000.0
DEFAULT_TIME_SCALE: float = 1.0
MIN_TIME_SCALE: float = 0.1      # stored when a non-positive scale is requested
RECOMMENDED_TICK_INTERVAL_MS: int = 1000

# Rolling windows kept in memory by long-running gardens
LOG_HISTORY_SIZE: int = 5_000
METRICS_HISTORY_SIZE: int = 10_000

# =============================================================================
# DASHBOARD
# =============================================================================
DASHBOARD_DPI: int = 150
