"""
SheetFeed configuration.
Defaults live here; every value can be overridden from the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent  # sheetfeed repo root


# ═══════════════════════════════════════
# CENTRAL SHEET
# ═══════════════════════════════════════

# To get the sheet ID from a Google Sheets URL:
# https://docs.google.com/spreadsheets/d/SHEET_ID_HERE/edit
# The sheet must be shared as "Anyone with the link can view".
CENTRAL_SHEET_ID = "1PaqcX2BSypJjLBDMA3DnlAxCHK5y0TWMSbCIkTScIQU"
CENTRAL_SHEET_GID = "0"              # tab used by the direct CSV export
CENTRAL_SHEET_NAME = "Sheet1"        # tab used by the gviz export

SHEET_REQUEST_TIMEOUT_SECONDS = 10   # per attempt, redirect follow-up included


# ═══════════════════════════════════════
# FEED
# ═══════════════════════════════════════

# "items"    → {"items": [{"label", "content"}]}
# "homepage" → fixed sections (nextMeeting, newsletter, volunteerAsks, partners)
FEED_POLICY = "items"


# ═══════════════════════════════════════
# SERVER
# ═══════════════════════════════════════

SERVER_HOST = "0.0.0.0"
SERVER_PORT = 8000
DEBUG = False
STATIC_DIR = str(PROJECT_ROOT / "public")


def _env_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _env_int(env, name, default):
    raw = env.get(name) or default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and passed around."""

    sheet_id: str = CENTRAL_SHEET_ID
    sheet_gid: str = CENTRAL_SHEET_GID
    sheet_name: str = CENTRAL_SHEET_NAME
    feed_policy: str = FEED_POLICY
    host: str = SERVER_HOST
    port: int = SERVER_PORT
    debug: bool = DEBUG
    static_dir: str = STATIC_DIR
    request_timeout: float = SHEET_REQUEST_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        return cls(
            sheet_id=env.get("CENTRAL_SHEET_ID") or CENTRAL_SHEET_ID,
            sheet_gid=env.get("CENTRAL_SHEET_GID") or CENTRAL_SHEET_GID,
            sheet_name=env.get("CENTRAL_SHEET_NAME") or CENTRAL_SHEET_NAME,
            feed_policy=(env.get("FEED_POLICY") or FEED_POLICY).strip().lower(),
            host=env.get("HOST") or SERVER_HOST,
            port=_env_int(env, "PORT", SERVER_PORT),
            debug=_env_bool(env.get("DEBUG", DEBUG)),
            static_dir=env.get("STATIC_DIR") or STATIC_DIR,
        )
