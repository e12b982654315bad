# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("GITGEN_WORKING_DIR", "~/.gitgen"))
    .expanduser()
    .resolve()
)

SETTINGS_FILE = os.environ.get("GITGEN_SETTINGS_FILE", "settings.enc")

# Fernet key material lives next to the settings, never inside them.
KEYS_DIR = WORKING_DIR / "keys"
KEY_FILE = "settings.key"

# When set, overrides the key file (urlsafe base64 Fernet key).
SETTINGS_KEY_ENV = "GITGEN_SETTINGS_KEY"

# Env key for log level (read by the CLI entry point only).
LOG_LEVEL_ENV = "GITGEN_LOG_LEVEL"

CURRENT_SETTINGS_VERSION = "4.0"

# ---------------------------------------------------------------------------
# Profile field limits
# ---------------------------------------------------------------------------
DEFAULT_TEMPERATURE = 0.2
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

DEFAULT_MAX_OUTPUT_TOKENS = 5000
MIN_OUTPUT_TOKENS = 100
MAX_OUTPUT_TOKENS = 8000

MIN_SECRET_LENGTH = 10
MAX_SECRET_LENGTH = 200

MAX_MODEL_NAME_LENGTH = 100

# Partial matching defaults (AppSettings)
DEFAULT_MINIMUM_MATCH_LENGTH = 2

ALIAS_PREFIX = "@"
