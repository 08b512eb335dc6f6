import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sheetfeed import sheets
from sheetfeed.app import create_app
from sheetfeed.config import Settings


class FakeResponse:
    def __init__(self, status_code=200, text="", headers=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self.headers = headers or {}
        self.encoding = None
        self.text = text


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get in the fetcher. Map url -> FakeResponse or Exception."""
    routes = {}
    calls = []
    sent = []  # (url, timeout, allow_redirects) per request

    def _get(url, timeout=None, allow_redirects=True):
        calls.append(url)
        sent.append((url, timeout, allow_redirects))
        result = routes.get(url, FakeResponse(404, reason="Not Found"))
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(sheets.requests, "get", _get)
    _get.routes = routes
    _get.calls = calls
    _get.sent = sent
    return _get


@pytest.fixture
def settings(tmp_path):
    (tmp_path / "index.html").write_text("<html>frontend</html>")
    (tmp_path / "app.js").write_text("console.log('hi');")
    return Settings(sheet_id="SHEET", static_dir=str(tmp_path))


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()
