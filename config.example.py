# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "AUTO_RELOAD_APP_NAME": "App display name (default: auto-reload).",
    "AUTO_RELOAD_LOG_LEVEL": "Console logging level (default: INFO).",
    "AUTO_RELOAD_LOG_DIR": "Directory of the debug log file (default: .local/auto_reload).",
    # Reload backoff
    "AUTO_RELOAD_MIN_INTERVAL_SECONDS": "First retry interval, >= 1 (default: 1).",
    "AUTO_RELOAD_MAX_INTERVAL_SECONDS": "Retry interval cap, >= min (default: 1800).",
    "AUTO_RELOAD_USABILITY_POLICY": (
        "first_match (only the first reported connection kind counts) or any_match (default: first_match)."
    ),
    # Connectivity
    "AUTO_RELOAD_POLL_INTERVAL_SECONDS": "psutil interface poll period (default: 2.0).",
}
