"""Configuration management"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DATA_PATH: Path = Path(__file__).parent / "data"

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Catalogs (JSON files). Defaults ship with the package.
REWARDS_CATALOG_PATH: Path = Path(
    os.getenv("REWARDS_CATALOG_PATH", str(PACKAGE_DATA_PATH / "rewards.json"))
)
CHALLENGES_CATALOG_PATH: Path = Path(
    os.getenv("CHALLENGES_CATALOG_PATH", str(PACKAGE_DATA_PATH / "challenges.json"))
)

# Anti-gaming limits
MAX_ACTIVITIES_PER_HOUR: int = int(os.getenv("MAX_ACTIVITIES_PER_HOUR", "10"))
MAX_RETROACTIVE_ENTRIES: int = int(os.getenv("MAX_RETROACTIVE_ENTRIES", "3"))
RETROACTIVE_WINDOW_HOURS: int = int(os.getenv("RETROACTIVE_WINDOW_HOURS", "24"))
ACTIVITY_HISTORY_LIMIT: int = int(os.getenv("ACTIVITY_HISTORY_LIMIT", "100"))
HISTORY_RETENTION_DAYS: int = int(os.getenv("HISTORY_RETENTION_DAYS", "7"))
MAX_EXERCISE_CALORIES: int = int(os.getenv("MAX_EXERCISE_CALORIES", "5000"))

# Scheduler
RESET_CHECK_INTERVAL_SECONDS: int = int(os.getenv("RESET_CHECK_INTERVAL_SECONDS", "3600"))

# Monitoring
ENABLE_PROMETHEUS: bool = os.getenv("ENABLE_PROMETHEUS", "true").lower() == "true"


# Validation
def validate_config() -> None:
    """Validate required configuration"""
    limits = {
        "MAX_ACTIVITIES_PER_HOUR": MAX_ACTIVITIES_PER_HOUR,
        "RETROACTIVE_WINDOW_HOURS": RETROACTIVE_WINDOW_HOURS,
        "ACTIVITY_HISTORY_LIMIT": ACTIVITY_HISTORY_LIMIT,
        "HISTORY_RETENTION_DAYS": HISTORY_RETENTION_DAYS,
        "MAX_EXERCISE_CALORIES": MAX_EXERCISE_CALORIES,
        "RESET_CHECK_INTERVAL_SECONDS": RESET_CHECK_INTERVAL_SECONDS,
    }
    for name, value in limits.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
    if MAX_RETROACTIVE_ENTRIES < 0:
        raise ValueError("MAX_RETROACTIVE_ENTRIES cannot be negative")
