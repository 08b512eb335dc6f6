import pytest
import requests

from sheetfeed.errors import (
    AllCandidatesExhaustedError,
    NetworkError,
    NotPubliclyAccessibleError,
    UpstreamStatusError,
)
from sheetfeed.sheets import candidate_urls, fetch_sheet, fetch_sheet_text, fetch_url

from conftest import FakeResponse

CSV = "Label,Content\nAnnounce,Hello\n"


def test_candidate_urls_order():
    urls = candidate_urls("abc", gid="7", sheet_name="Tab")
    assert urls == [
        "https://docs.google.com/spreadsheets/d/abc/export?format=csv&gid=7",
        "https://docs.google.com/spreadsheets/d/abc/gviz/tq?tqx=out:csv&sheet=Tab",
        "https://docs.google.com/spreadsheets/d/abc/export?format=csv",
    ]


def test_first_success_wins(fake_get):
    first, second, third = candidate_urls("S")
    fake_get.routes[first] = FakeResponse(text=CSV)
    fake_get.routes[second] = FakeResponse(text="other")

    assert fetch_sheet_text("S") == CSV
    assert fake_get.calls == [first]


def test_html_falls_through_to_next_candidate(fake_get):
    first, second, _ = candidate_urls("S")
    fake_get.routes[first] = FakeResponse(text="<html><body>Sign in</body></html>")
    fake_get.routes[second] = FakeResponse(text=CSV)

    assert fetch_sheet_text("S") == CSV
    assert fake_get.calls == [first, second]


def test_html_sniff_ignores_leading_whitespace(fake_get):
    url = "https://example.test/export"
    fake_get.routes[url] = FakeResponse(text="\n  <!DOCTYPE html><html></html>")
    with pytest.raises(NotPubliclyAccessibleError):
        fetch_url(url)


def test_html_sniff_is_case_sensitive(fake_get):
    url = "https://example.test/export"
    fake_get.routes[url] = FakeResponse(text="<HTML>,looks,odd\n")
    assert fetch_url(url) == "<HTML>,looks,odd\n"


def test_redirect_followed_once(fake_get):
    url = "https://example.test/export"
    target = "https://example.test/real"
    fake_get.routes[url] = FakeResponse(302, headers={"Location": target}, reason="Found")
    fake_get.routes[target] = FakeResponse(text=CSV)

    assert fetch_url(url) == CSV
    assert fake_get.sent == [(url, 10, False), (target, 10, False)]


def test_second_redirect_not_chased(fake_get):
    url = "https://example.test/export"
    hop = "https://example.test/hop"
    fake_get.routes[url] = FakeResponse(307, headers={"Location": hop})
    fake_get.routes[hop] = FakeResponse(301, headers={"Location": "https://example.test/final"},
                                        reason="Moved Permanently")

    with pytest.raises(UpstreamStatusError) as exc:
        fetch_url(url)
    assert exc.value.status_code == 301
    assert fake_get.sent == [(url, 10, False), (hop, 10, False)]


def test_redirect_without_location_is_a_failure(fake_get):
    url = "https://example.test/export"
    fake_get.routes[url] = FakeResponse(302, reason="Found")
    with pytest.raises(UpstreamStatusError):
        fetch_url(url)


def test_network_errors_fall_through(fake_get):
    first, second, third = candidate_urls("S")
    fake_get.routes[first] = requests.Timeout("slow")
    fake_get.routes[second] = requests.ConnectionError("refused")
    fake_get.routes[third] = FakeResponse(text=CSV)

    assert fetch_sheet_text("S") == CSV
    assert fake_get.calls == [first, second, third]


def test_network_error_wrapped(fake_get):
    url = "https://example.test/export"
    fake_get.routes[url] = requests.Timeout("slow")
    with pytest.raises(NetworkError):
        fetch_url(url)


def test_all_candidates_exhausted(fake_get):
    with pytest.raises(AllCandidatesExhaustedError) as exc:
        fetch_sheet_text("S")

    err = exc.value
    assert "Anyone with the link can view" in str(err)
    assert [url for url, _ in err.failures] == candidate_urls("S")
    assert all(isinstance(e, UpstreamStatusError) for _, e in err.failures)


def test_fetch_sheet_decodes(fake_get, settings):
    first = candidate_urls(settings.sheet_id)[0]
    fake_get.routes[first] = FakeResponse(text=CSV)
    table = fetch_sheet(settings)
    assert fake_get.sent == [(first, 10, False)]
    assert table.headers == ["Label", "Content"]
    assert table.rows == [{"Label": "Announce", "Content": "Hello"}]


def test_upstream_status_message():
    assert str(UpstreamStatusError(404, "Not Found")) == "HTTP 404: Not Found"
    assert str(UpstreamStatusError(500)) == "HTTP 500"
    assert str(UpstreamStatusError(418, "Teapot: ")) == "HTTP 418: Teapot: "
