"""
client/wikipedia.py のテスト（ネットワークは使わない）
"""
import pytest
import requests

from eracal.client.wikipedia import WikipediaClient, parse_era_list

ERA_LIST_HTML = """
<html><body>
<table><tbody>
<tr><th><span id="日本の元号">日本の元号</span></th></tr>
<tr><td><ul>
<li><a href="/wiki/%E5%A4%A7%E5%8C%96">大化</a></li>
<li><a href="/wiki/%E7%99%BD%E9%9B%89">白雉</a></li>
<li><a>朱鳥</a></li>
</ul></td></tr>
</tbody></table>
<ul><li><a href="/wiki/Other">関係ない</a></li></ul>
</body></html>
"""


class _DummyResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        raise ValueError("not json")


@pytest.fixture
def client(tmp_path):
    return WikipediaClient(cache_dir=tmp_path / "cache", rate_limit_sec=0)


class TestParseEraList:
    def test_links_in_order(self):
        gengous = parse_era_list(ERA_LIST_HTML)
        assert [g["name"] for g in gengous] == ["大化", "白雉", "朱鳥"]
        assert gengous[0]["href"] == "/wiki/%E5%A4%A7%E5%8C%96"

    def test_missing_href_uses_default(self):
        gengous = parse_era_list(ERA_LIST_HTML, default_href="/wiki/default")
        assert gengous[2]["href"] == "/wiki/default"

    def test_missing_table(self):
        with pytest.raises(RuntimeError):
            parse_era_list("<html><body><p>なし</p></body></html>")


class TestWikipediaClient:
    def test_fetch_era_list_is_cached(self, client, monkeypatch):
        calls = []

        def fake_request(method, url, params=None, timeout=None):
            calls.append(url)
            return _DummyResponse(ERA_LIST_HTML)

        monkeypatch.setattr(client.session, "request", fake_request)

        first = client.fetch_era_list()
        second = client.fetch_era_list()
        assert first == second
        assert len(first) == 3
        assert len(calls) == 1
        assert calls[0].startswith("https://ja.wikipedia.org/wiki/")

    def test_fetch_era_page(self, client, monkeypatch):
        monkeypatch.setattr(
            client.session,
            "request",
            lambda method, url, params=None, timeout=None: _DummyResponse(f"<html>{url}</html>"),
        )
        assert client.fetch_era_page("/wiki/令和") == "<html>https://ja.wikipedia.org/wiki/令和</html>"

    def test_http_error_propagates(self, client, monkeypatch):
        monkeypatch.setattr(
            client.session,
            "request",
            lambda method, url, params=None, timeout=None: _DummyResponse("", status_code=503),
        )
        with pytest.raises(requests.HTTPError):
            client.fetch_era_page("/wiki/令和")
