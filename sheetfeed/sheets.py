"""
Public Google Sheet export fetcher.

No credentials are sent: this only works when the sheet is shared as
"Anyone with the link can view" (or published to the web). Several export
URL shapes are tried in order; the first one returning real CSV wins.
"""

import logging

import requests

from . import config
from .errors import (
    AllCandidatesExhaustedError,
    NetworkError,
    NotPubliclyAccessibleError,
    SheetFetchError,
    UpstreamStatusError,
)
from .tabular import decode

log = logging.getLogger("sheetfeed")

REDIRECT_STATUSES = (301, 302, 307, 308)
HTML_MARKERS = ("<!DOCTYPE", "<html")

_EXPORT_BASE = "https://docs.google.com/spreadsheets/d/{sheet_id}"


def candidate_urls(sheet_id, gid=config.CENTRAL_SHEET_GID, sheet_name=config.CENTRAL_SHEET_NAME):
    """Export endpoints for the same sheet, in the order they are tried."""
    base = _EXPORT_BASE.format(sheet_id=sheet_id)
    return [
        f"{base}/export?format=csv&gid={gid}",
        f"{base}/gviz/tq?tqx=out:csv&sheet={sheet_name}",
        f"{base}/export?format=csv",
    ]


def _get(url, timeout):
    try:
        return requests.get(url, timeout=timeout, allow_redirects=False)
    except requests.Timeout as e:
        raise NetworkError(f"Request timeout: {url}") from e
    except requests.RequestException as e:
        raise NetworkError(f"Request error for {url}: {e}") from e


def fetch_url(url, timeout=config.SHEET_REQUEST_TIMEOUT_SECONDS):
    """Fetch one export URL and return its CSV text.

    Follows a single redirect; the follow-up response is final even if it
    redirects again. Raises a SheetFetchError subclass on any failure.
    """
    resp = _get(url, timeout)

    location = resp.headers.get("Location")
    if resp.status_code in REDIRECT_STATUSES and location:
        log.info(f"Following redirect to: {location}")
        resp = _get(location, timeout)

    if resp.status_code != 200:
        raise UpstreamStatusError(resp.status_code, resp.reason)

    resp.encoding = "utf-8"
    text = resp.text

    # HTML instead of CSV usually means the sheet isn't public
    if text.strip().startswith(HTML_MARKERS):
        log.error("Received HTML instead of CSV. Sheet may not be publicly accessible.")
        raise NotPubliclyAccessibleError()

    return text


def fetch_sheet_text(sheet_id, gid=config.CENTRAL_SHEET_GID, sheet_name=config.CENTRAL_SHEET_NAME,
                     timeout=config.SHEET_REQUEST_TIMEOUT_SECONDS):
    """Try each candidate URL in turn; return the first CSV body."""
    failures = []
    for url in candidate_urls(sheet_id, gid, sheet_name):
        try:
            text = fetch_url(url, timeout=timeout)
        except SheetFetchError as e:
            log.warning(f"Failed to fetch with URL: {url} ({e})")
            failures.append((url, e))
            continue
        log.info(f"Fetched sheet export from {url} ({len(text)} chars)")
        return text

    raise AllCandidatesExhaustedError(failures)


def fetch_sheet(settings):
    """Fetch and decode the configured sheet into a Table."""
    text = fetch_sheet_text(
        settings.sheet_id,
        gid=settings.sheet_gid,
        sheet_name=settings.sheet_name,
        timeout=settings.request_timeout,
    )
    return decode(text)
