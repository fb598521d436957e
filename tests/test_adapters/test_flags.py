"""Tests for per-request opt-out flags."""

from request_snapshot import (
    DISABLE_BODY_PARSING,
    DISABLE_FILE_PARSING,
    DISABLE_QUERY_PARSING,
    NormalizeOptions,
    normalize,
)
from request_snapshot.adapters.flags import apply_request_flags


class TestApplyRequestFlags:
    """Tests for apply_request_flags function."""

    def test_no_flags_returns_same_options(self):
        """Test that options are returned unchanged without flags."""
        options = NormalizeOptions()
        assert apply_request_flags({"method": "POST"}, options) is options

    def test_flags_switch_sections_off(self):
        """Test that each flag disables its section."""
        options = NormalizeOptions()
        request = {DISABLE_BODY_PARSING: True, DISABLE_FILE_PARSING: True}

        updated = apply_request_flags(request, options)

        assert updated.parse_body is False
        assert updated.parse_files is False
        assert updated.parse_query is True
        assert options.parse_body is True

    def test_falsy_flag_is_ignored(self):
        """Test that a false flag leaves the section on."""
        updated = apply_request_flags({DISABLE_QUERY_PARSING: False}, NormalizeOptions())
        assert updated.parse_query is True


class TestFlagsInSnapshots:
    """Tests for flags observed through normalize."""

    def test_all_sections_disabled(self):
        """Test a request that opts out of every section."""
        req = {
            "method": "POST",
            "url": "/upload?token=abc",
            "body": {"a": 1},
            "file": {"fieldname": "x"},
            DISABLE_BODY_PARSING: True,
            DISABLE_QUERY_PARSING: True,
            DISABLE_FILE_PARSING: True,
        }

        request = normalize(req=req)["request"]

        assert "body" not in request
        assert "file" not in request
        assert request["query"] == "token=abc"
