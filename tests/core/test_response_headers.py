import pytest
from exchange_gate.core.response import Response
from exchange_gate.exceptions import HeaderParseError


class TestHeaderAccess:
    def test_get_header_absent_returns_none(self, response: Response):
        assert response.get_header("X-Foo") is None
        assert response.get_headers("X-Foo") is None

    def test_get_header_combines_values(self, response: Response):
        response.headers["X-Foo"] = ["a", "b"]
        assert response.get_header("X-Foo") == "a,b"
        assert response.get_headers("X-Foo") == ["a", "b"]

    def test_set_header_replaces_and_chains(self, response: Response):
        response.headers["X-Foo"] = ["a", "b"]
        result = response.set_header("X-Foo", "c").set_header("X-Bar", "d")

        assert result is response
        assert response.headers == {"X-Foo": ["c"], "X-Bar": ["d"]}

    def test_set_header_empty_removes_by_name(self, response: Response):
        response.set_header("X-Foo", "a").set_header("X-Keep", "k")
        response.set_header("X-Foo", " ")

        assert response.get_headers("X-Foo") is None
        assert response.headers == {"X-Keep": ["k"]}

    def test_headers_setter_replaces_mapping_on_context(self, response: Response):
        new_headers = {"X-New": ["1"]}
        response.headers = new_headers
        assert response.context.headers is new_headers


class TestContentType:
    def test_round_trip(self, response: Response):
        response.content_type = "text/html"
        assert response.content_type == "text/html"
        assert response.headers["Content-Type"] == ["text/html"]

    def test_absent_is_none(self, response: Response):
        assert response.content_type is None

    def test_empty_removes(self, response: Response):
        response.content_type = "text/html"
        response.content_type = ""
        assert "Content-Type" not in response.headers


class TestContentLength:
    def test_round_trip(self, response: Response):
        response.content_length = 1234
        assert response.headers["Content-Length"] == ["1234"]
        assert response.content_length == 1234

    def test_zero_is_stored(self, response: Response):
        response.content_length = 0
        assert response.content_length == 0

    def test_missing_header_raises_instead_of_defaulting(self, response: Response):
        with pytest.raises(HeaderParseError) as excinfo:
            _ = response.content_length
        assert excinfo.value.header_name == "Content-Length"

    def test_non_numeric_header_raises(self, response: Response):
        response.headers["Content-Length"] = ["twelve"]
        with pytest.raises(HeaderParseError):
            _ = response.content_length

    @pytest.mark.parametrize("value", ["1_000", "\u0661\u0662", "12.0", "0x10", ""])
    def test_non_ascii_digit_forms_raise(self, response: Response, value: str):
        response.headers["Content-Length"] = [value]
        with pytest.raises(HeaderParseError):
            _ = response.content_length

    def test_surrounding_whitespace_is_allowed(self, response: Response):
        response.headers["Content-Length"] = [" 42 "]
        assert response.content_length == 42

    def test_multiple_values_do_not_parse(self, response: Response):
        response.headers["Content-Length"] = ["12", "12"]
        with pytest.raises(HeaderParseError):
            _ = response.content_length
