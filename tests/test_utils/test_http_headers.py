"""Tests for header normalisation and response-head parsing."""

from request_snapshot.utils.http_headers import headers_to_lower_case, parse_response_head

RAW_RESPONSE = (
    "HTTP/1.1 200 OK\r\n"
    "Date: Tue, 10 Jun 2014 07:19:27 GMT\r\n"
    "Connection: keep-alive\r\n"
    "Transfer-Encoding: chunked\r\n"
    "\r\n"
    "Hello World"
)


class TestHeadersToLowerCase:
    """Tests for headers_to_lower_case function."""

    def test_names_are_lowercased(self):
        """Test that header names are lower-cased."""
        assert headers_to_lower_case({"Content-Type": "text/plain"}) == {
            "content-type": "text/plain"
        }

    def test_non_string_values_are_dropped(self):
        """Test that values other than text are removed."""
        result = headers_to_lower_case({"X-Count": 5, "X-List": ["a"], "X-Ok": "yes"})
        assert result == {"x-ok": "yes"}

    def test_bytes_are_decoded(self):
        """Test that ASGI-style byte headers are decoded."""
        assert headers_to_lower_case({b"X-Raw": b"value"}) == {"x-raw": "value"}

    def test_non_mapping_input(self):
        """Test that anything but a mapping yields no headers."""
        assert headers_to_lower_case("Content-Type: text/plain") == {}
        assert headers_to_lower_case(None) == {}

    def test_input_is_not_modified(self):
        """Test that a new dict is returned."""
        headers = {"X-A": "1"}
        headers_to_lower_case(headers)
        assert headers == {"X-A": "1"}


class TestParseResponseHead:
    """Tests for parse_response_head function."""

    def test_full_response(self):
        """Test parsing a status line, headers and ignoring the body."""
        head = parse_response_head(RAW_RESPONSE)

        assert head.http_version == "1.1"
        assert head.status_code == 200
        assert head.reason_phrase == "OK"
        assert head.headers == {
            "date": "Tue, 10 Jun 2014 07:19:27 GMT",
            "connection": "keep-alive",
            "transfer-encoding": "chunked",
        }

    def test_multi_word_reason(self):
        """Test that the reason phrase keeps its spaces."""
        head = parse_response_head("HTTP/1.0 404 Not Found\r\n\r\n")
        assert head.status_code == 404
        assert head.reason_phrase == "Not Found"

    def test_missing_reason(self):
        """Test that an absent reason phrase is empty."""
        head = parse_response_head("HTTP/2.0 204\r\n\r\n")
        assert head.http_version == "2.0"
        assert head.reason_phrase == ""

    def test_headers_without_status_line(self):
        """Test that header-only text leaves status fields unset."""
        head = parse_response_head("Date: Tue, 10 Jun 2014 07:19:27 GMT\nX-Foo: bar\n")

        assert head.status_code is None
        assert head.http_version is None
        assert head.headers == {"date": "Tue, 10 Jun 2014 07:19:27 GMT", "x-foo": "bar"}

    def test_malformed_status_line_is_skipped(self):
        """Test that a broken status line is not read as a header."""
        head = parse_response_head("HTTP/one two\r\nX-Foo: bar\r\n")

        assert head.status_code is None
        assert head.headers == {"x-foo": "bar"}

    def test_repeated_headers_are_joined(self):
        """Test that repeated headers are combined."""
        head = parse_response_head("HTTP/1.1 200 OK\nSet-Cookie: a=1\nSet-Cookie: b=2\n")
        assert head.headers == {"set-cookie": "a=1, b=2"}

    def test_value_with_colon(self):
        """Test that only the first colon splits name and value."""
        head = parse_response_head("Location: http://example.com:8080/\n")
        assert head.headers == {"location": "http://example.com:8080/"}

    def test_empty_text(self):
        """Test that empty text parses to an empty head."""
        head = parse_response_head("")
        assert head.headers == {}
        assert head.status_code is None
