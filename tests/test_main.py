from __future__ import annotations

import requests

import main


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status != 200:
            raise requests.HTTPError(f"HTTP {self.status}")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


def test_retry_session_mounts_adapter():
    s = main._retry_session(retries=5)
    adapter = s.get_adapter("https://httpbin.org/ip")
    assert adapter.max_retries.total == 5
    assert 503 in adapter.max_retries.status_forcelist


def test_main_fetches_then_uses_cache(tmp_path, monkeypatch, capsys):
    session = FakeSession(FakeResponse({"origin": "203.0.113.7"}))
    monkeypatch.setattr(main, "_retry_session", lambda: session)
    path = tmp_path / "ip.cache"

    assert main.main(["--cache-path", str(path)]) == 0
    assert main.main(["--cache-path", str(path)]) == 0
    assert capsys.readouterr().out.splitlines() == ["203.0.113.7", "203.0.113.7"]
    assert session.urls == [main.ORIGIN_URL]
    assert session.closed
    assert main.OriginIp.model_validate_json(path.read_text()).origin == "203.0.113.7"


def test_main_reports_fetch_error(tmp_path, monkeypatch, capsys):
    session = FakeSession(error=requests.ConnectionError("offline"))
    monkeypatch.setattr(main, "_retry_session", lambda: session)
    path = tmp_path / "ip.cache"

    assert main.main(["--cache-path", str(path)]) == 1
    assert session.closed
    assert capsys.readouterr().out == ""
    assert not path.exists()


def test_main_http_error(tmp_path, monkeypatch):
    session = FakeSession(FakeResponse({}, status=502))
    monkeypatch.setattr(main, "_retry_session", lambda: session)
    assert main.main(["--cache-path", str(tmp_path / "ip.cache"), "--max-age", "10"]) == 1
