import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./flowledger.db")

# Callers allowed to record, flag and tag parties
LEDGER_WRITERS = [
    w.strip() for w in os.getenv("LEDGER_WRITERS", "owner").split(",") if w.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "false").lower() in ("1", "true", "yes")
