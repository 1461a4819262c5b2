"""Closed enumerations and fixed values used across the scheduler"""

from enum import Enum


class TeamId(str, Enum):
    TEAM_A = "Team_A"
    TEAM_B = "Team_B"


class JobStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Frequency(str, Enum):
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"


class ClientFrequency(str, Enum):
    """Default frequency offered when a client pre-fills a recurring job"""

    NONE = "none"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"


# Days between two occurrences of a recurring rule
INTERVAL_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.FORTNIGHTLY: 14,
}

# All available workers
WORKER_ROSTER = (
    "Amylea",
    "Angelo",
    "Chloe",
    "George",
    "Leeroy",
    "Myka",
    "Nathan",
    "Olivia",
    "Tracy",
)

# Logical resource keys in the backing store
SCHEDULE_KEY = "schedule"
CLIENTS_KEY = "clients"
RECURRING_JOBS_KEY = "recurring-jobs"

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="
