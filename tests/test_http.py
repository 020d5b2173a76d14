from __future__ import annotations

import pytest

from models.errors import TransportFailure
from scrapers import http


def test_unknown_transport_is_rejected() -> None:
    with pytest.raises(ValueError, match="unknown transport"):
        http.make_fetcher("urllib")


def test_curl_cffi_errors_become_transport_failures(monkeypatch) -> None:
    def refuse(url, **kwargs):
        raise ConnectionError("connection refused")

    monkeypatch.setattr(http.curl_requests, "get", refuse)

    with pytest.raises(TransportFailure, match="connection refused") as excinfo:
        http.make_fetcher("curl_cffi", timeout=3)("https://shop.example/p/123456")

    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_fetcher_passes_timeout_and_returns_text(monkeypatch) -> None:
    seen = {}

    class Response:
        text = "<html>ok</html>"

        def raise_for_status(self):
            return None

    def get(url, **kwargs):
        seen["url"] = url
        seen["timeout"] = kwargs["timeout"]
        return Response()

    monkeypatch.setattr(http.curl_requests, "get", get)

    assert http.make_fetcher(timeout=4.5)("https://shop.example/p/1") == "<html>ok</html>"
    assert seen == {"url": "https://shop.example/p/1", "timeout": 4.5}
