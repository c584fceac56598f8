"""Tests for roost.http.query — query string parameters."""

import pytest

from roost.http.query import QueryParams


class TestQueryParams:
    def test_first_value_wins(self) -> None:
        query = QueryParams(b"tag=a&tag=b")
        assert query["tag"] == "a"
        assert query.get_list("tag") == ["a", "b"]
        assert list(query) == ["tag"]
        assert len(query) == 1

    def test_missing(self) -> None:
        query = QueryParams()
        assert query.get("x") is None
        assert "x" not in query
        with pytest.raises(KeyError):
            query["x"]

    def test_blank_values_kept(self) -> None:
        assert QueryParams("flag=")["flag"] == ""

    def test_percent_decoding(self) -> None:
        assert QueryParams(b"q=hello%20world")["q"] == "hello world"

    def test_raw_is_verbatim(self) -> None:
        assert QueryParams(b"q=hello%20world&x=1").raw == "q=hello%20world&x=1"

    def test_get_int(self) -> None:
        query = QueryParams(b"n=5&bad=x")
        assert query.get_int("n") == 5
        assert query.get_int("bad", 7) == 7
        assert query.get_int("missing") is None


class TestGetPage:
    @pytest.mark.parametrize(
        ("query_string", "expected"),
        [(b"page=6", 5), (b"page=1", 0), (b"page=-2", 0), (b"", 0), (b"page=abc", 0)],
    )
    def test_zero_based(self, query_string: bytes, expected: int) -> None:
        assert QueryParams(query_string).get_page() == expected

    def test_custom_key(self) -> None:
        assert QueryParams(b"p=3").get_page("p") == 2
