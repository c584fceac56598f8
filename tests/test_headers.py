"""Tests for roost.http.headers — request and response headers."""

from roost.http.headers import Headers, MutableHeaders


class TestHeaders:
    def test_case_insensitive_lookup(self) -> None:
        headers = Headers(((b"content-type", b"text/html"),))
        assert headers["Content-Type"] == "text/html"
        assert "CONTENT-TYPE" in headers

    def test_get_list(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers.get_list("accept") == ["a", "b"]
        assert headers["accept"] == "a"
        assert len(headers) == 1

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x-missing") is None
        assert headers.get("x-missing", "d") == "d"

    def test_from_dict(self) -> None:
        headers = Headers.from_dict({"X-Forwarded-For": "1.2.3.4"})
        assert headers.get("x-forwarded-for") == "1.2.3.4"
        assert list(headers) == ["x-forwarded-for"]


class TestMutableHeaders:
    def test_set_replaces(self) -> None:
        headers = MutableHeaders()
        headers.set("X-A", "1")
        headers.set("x-a", "2")
        assert headers.get_list("X-A") == ["2"]

    def test_add_appends(self) -> None:
        headers = MutableHeaders()
        headers.add("Vary", "Origin")
        headers.add("Vary", "Accept")
        assert headers.get_list("vary") == ["Origin", "Accept"]
        assert len(headers) == 2

    def test_delete(self) -> None:
        headers = MutableHeaders()
        headers.set("X-A", "1")
        headers.delete("X-A")
        assert "x-a" not in headers

    def test_copy_is_independent(self) -> None:
        headers = MutableHeaders()
        headers.set("X-A", "1")
        clone = headers.copy()
        clone.set("X-A", "2")
        assert headers.get("X-A") == "1"

    def test_encode(self) -> None:
        headers = MutableHeaders()
        headers.set("Content-Type", "text/plain")
        assert headers.encode() == [(b"content-type", b"text/plain")]
