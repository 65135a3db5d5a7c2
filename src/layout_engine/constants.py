"""Phase configuration and team-capacity defaults.

Capacity is expressed in labor hours per week.  A bay with no team falls
back to two staff at the standard 29 h/week.
"""

PHASES_ORDER = ["fab", "paint", "production", "it", "ntc", "qc"]

# Company standard split, used where a project carries no percentages.
DEFAULT_PHASE_PERCENTAGES: dict[str, float] = {
    "fab": 27,
    "paint": 7,
    "production": 60,
    "it": 7,
    "ntc": 7,
    "qc": 7,
}

PRODUCTION_RELATED_PHASES = ["production", "it", "ntc", "qc"]

DEFAULT_HOURS_PER_WEEK = 29
DEFAULT_STAFF_COUNT = 2
DEFAULT_TEAM_CAPACITY = DEFAULT_STAFF_COUNT * DEFAULT_HOURS_PER_WEEK  # 58

# Representative-policy fallbacks for a team bay with unset staff counts
DEFAULT_ASSEMBLY_STAFF = 2
DEFAULT_ELECTRICAL_STAFF = 1

MIN_EXPANSION_FACTOR = 1.0
DEFAULT_EXPANSION_CEILING = 5.0

# Utilization thresholds (percent, strictly greater than)
OVER_CAPACITY_THRESHOLD = 90
HIGH_UTILIZATION_THRESHOLD = 75
GOOD_UTILIZATION_THRESHOLD = 40

DAYS_PER_WEEK = 7
