"""Application settings."""

import os
from pathlib import Path

# Gateway
GATEWAY_URL = os.getenv("ELECTION_GATEWAY_URL", "")
GATEWAY_TOKEN = os.getenv("ELECTION_GATEWAY_TOKEN", "")
API_TIMEOUT = 30
API_RETRIES = 3
MAX_CONCURRENT = 4

# Admin (placeholder shared secret; real authorization belongs to the gateway)
ADMIN_SECRET = os.getenv("ELECTION_ADMIN_SECRET", "")

# Local cache
CACHE_PATH = os.getenv("ELECTION_CACHE_PATH", "election_cache.duckdb")

# Logging
LOG_DIR = Path("logs")

# Sync
SYNC_INTERVAL = 10.0
ADMIN_SYNC_INTERVAL = 5.0
RECONCILE_DELAY = 1.0
COMBINED_READ = True
