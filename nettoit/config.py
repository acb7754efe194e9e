"""Application identifiers and default locations."""

from pathlib import Path

APP_ID = "nettoit"
APP_VERSION = "v1"

# Autosave key for the input record (last write wins)
STORAGE_KEY = f"toolstack.{APP_ID}.{APP_VERSION}"
# Reserved for a profile shared across toolstack modules; never written here
PROFILE_KEY = "toolstack.profile.v1"

DEFAULT_DB_PATH = Path.home() / f".{APP_ID}" / f"{APP_ID}.db"
DB_ENVVAR = "NETTOIT_DB"
