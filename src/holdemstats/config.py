# src/holdemstats/config.py

"""Runtime configuration read from the environment."""

import os

# Base URL of the game's HTTP API
API_URL = os.getenv("HOLDEMSTATS_API_URL", "http://localhost:8080/api")

# Seconds before httpx gives up on connect/read
HTTP_TIMEOUT = float(os.getenv("HOLDEMSTATS_HTTP_TIMEOUT", "10.0"))

# Hand history page size used until set_page_size() is called
DEFAULT_PAGE_SIZE = int(os.getenv("HOLDEMSTATS_PAGE_SIZE", "20"))

# Number of leaderboard rows requested when no limit is given
DEFAULT_LEADERBOARD_LIMIT = int(os.getenv("HOLDEMSTATS_LEADERBOARD_LIMIT", "10"))
