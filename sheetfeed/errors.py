"""Errors raised while pulling a sheet export."""

SHARE_HINT = (
    'Please ensure the sheet is set to "Anyone with the link can view" and try '
    "publishing it to web (File > Share > Publish to web)."
)


class SheetFetchError(Exception):
    """Base class for a failed sheet export attempt."""


class NetworkError(SheetFetchError):
    """Connection failure or timeout for one candidate URL."""


class UpstreamStatusError(SheetFetchError):
    """Final response (after any redirect) was not a 200."""

    def __init__(self, status_code, reason=""):
        self.status_code = status_code
        self.reason = reason or ""
        message = f"HTTP {status_code}: {self.reason}" if self.reason else f"HTTP {status_code}"
        super().__init__(message)


class NotPubliclyAccessibleError(SheetFetchError):
    """Google answered with an HTML page (login or error) instead of CSV."""

    def __init__(self, message=None):
        super().__init__(message or f"Sheet is not publicly accessible. {SHARE_HINT}")


class AllCandidatesExhaustedError(SheetFetchError):
    """Every export URL failed. `failures` holds (url, error) pairs."""

    def __init__(self, failures=None):
        self.failures = list(failures or [])
        super().__init__(f"All export URL formats failed. {SHARE_HINT}")
