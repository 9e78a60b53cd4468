import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./booking.db")

# "development" exposes raw store errors in API responses - never in production
ENVIRONMENT = os.getenv("ENVIRONMENT", "production").lower()
IS_DEVELOPMENT = ENVIRONMENT == "development"

# Scheduling rules
BUFFER_MINUTES = int(os.getenv("BUFFER_MINUTES", "15"))  # Idle time between two appointments
SLOT_INTERVAL_MINUTES = int(os.getenv("SLOT_INTERVAL_MINUTES", "15"))  # Step between slot starts
DEFAULT_DURATION_MINUTES = int(os.getenv("DEFAULT_DURATION_MINUTES", "90"))
BOOKING_WINDOW_DAYS = int(os.getenv("BOOKING_WINDOW_DAYS", "60"))  # Calendar horizon

# Which weekly schedule is authoritative:
# "auto" (available_slots when any active row exists), "opening_hours" or "available_slots"
SCHEDULE_SOURCE = os.getenv("SCHEDULE_SOURCE", "auto").lower()
