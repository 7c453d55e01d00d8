from datetime import date

import httpx
from fastapi.testclient import TestClient

from app.config import settings
from app.deps import build_http_client
from app.main import app
from app.quotes.sheets import SHEET_ACCESS_MSG, sheet_csv_urls

client = TestClient(app)

CSV = 'Day,Quote\n1,"First, of many"\n14,"Pi day ""quote"""\n74,Day of year\n'


def test_quote_by_day_of_month(upstream):
    upstream(lambda req: httpx.Response(200, text=CSV))

    r = client.get("/api/quote")
    assert r.status_code == 200
    assert r.json() == {
        "quote": 'Pi day "quote"',
        "date": "2024-03-14",
        "dayOfMonth": 14,
        "totalQuotes": 4,  # header row counts as a row
        "matchedByDate": True,
    }


def test_quote_by_day_of_year(upstream):
    upstream(lambda req: httpx.Response(200, text=CSV), day=date(2024, 3, 15))

    body = client.get("/api/quote").json()
    # Mar 15 2024 is day 75; no "15" or "75" row, so the hash picks one
    assert body["matchedByDate"] is False
    assert body["dayOfMonth"] == 15

    upstream(lambda req: httpx.Response(200, text="75,Seventy-five\n"), day=date(2024, 3, 15))
    assert client.get("/api/quote").json()["quote"] == "Seventy-five"


def test_first_url_wins(upstream, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_SHEETS_ID", "sheet123")
    upstream(lambda req: httpx.Response(200, text=CSV))

    client.get("/api/quote")
    assert [c.url for c in upstream.calls] == [httpx.URL(sheet_csv_urls("sheet123")[0])]
    assert upstream.calls[0].headers["accept"] == "text/csv,text/plain,*/*"


def test_falls_back_through_urls_in_order(upstream, monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_SHEETS_ID", "sheet123")
    urls = sheet_csv_urls("sheet123")

    def handler(req):
        if req.url == httpx.URL(urls[2]):
            return httpx.Response(200, text=CSV)
        return httpx.Response(401)

    upstream(handler)
    r = client.get("/api/quote")
    assert r.status_code == 200
    assert [c.url for c in upstream.calls] == [httpx.URL(u) for u in urls]


def test_redirects_are_followed(upstream):
    def handler(req):
        if req.url.host == "docs.google.com":
            return httpx.Response(307, headers={"Location": "https://doc-0s.googleusercontent.com/x.csv"})
        return httpx.Response(200, text=CSV)

    upstream(handler)
    r = client.get("/api/quote")
    assert r.status_code == 200
    assert len(upstream.calls) == 2


def test_private_sheet_is_access_error(upstream):
    upstream(lambda req: httpx.Response(403))

    r = client.get("/api/quote")
    assert r.status_code == 500
    assert r.json() == {"error": SHEET_ACCESS_MSG}
    assert len(upstream.calls) == 3


def test_empty_sheet_is_404(upstream):
    upstream(lambda req: httpx.Response(200, text="\n\n"))

    r = client.get("/api/quote")
    assert r.status_code == 404
    assert r.json() == {"error": "No quotes found"}


def _redirect_chain(hops):
    # docs.google.com -> hop/1 -> ... -> hop/<hops>, which serves the CSV
    def handler(req):
        if req.url.host == "docs.google.com":
            return httpx.Response(302, headers={"Location": "https://doc-0s.googleusercontent.com/hop/1"})
        n = int(req.url.path.rsplit("/", 1)[-1])
        if n < hops:
            return httpx.Response(
                302, headers={"Location": f"https://doc-0s.googleusercontent.com/hop/{n + 1}"}
            )
        return httpx.Response(200, text=CSV)

    return handler


def test_ten_redirects_still_succeed(upstream):
    upstream(_redirect_chain(10))

    r = client.get("/api/quote")
    assert r.status_code == 200
    assert r.json()["quote"] == 'Pi day "quote"'


def test_eleven_redirects_fail_every_attempt(upstream):
    upstream(_redirect_chain(11))

    r = client.get("/api/quote")
    assert r.status_code == 500
    assert r.json() == {"error": SHEET_ACCESS_MSG}
    # each of the three URLs hit the cap, none succeeded
    assert sum(1 for c in upstream.calls if c.url.host == "docs.google.com") == 3


def test_outbound_client_limits():
    c = build_http_client()
    assert c.max_redirects == 10
    assert c.timeout == httpx.Timeout(15.0)
    assert c.follow_redirects is True
