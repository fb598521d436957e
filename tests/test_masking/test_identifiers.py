"""Tests for identifier heuristics."""

import pytest

from request_snapshot.core.options import MaskOptions
from request_snapshot.masking.identifiers import (
    is_cuid,
    is_id_field,
    is_identifier_value,
    is_object_id,
    is_uuid,
    to_snake_case,
)


class TestToSnakeCase:
    """Tests for to_snake_case function."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("productId", "product_id"),
            ("productID", "product_id"),
            ("product-id", "product_id"),
            ("product[id]", "product_id"),
            ("HTTPResponseId", "http_response_id"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_conversions(self, name, expected):
        """Test common naming styles normalise to snake case."""
        assert to_snake_case(name) == expected


class TestIsIdField:
    """Tests for is_id_field function."""

    @pytest.mark.parametrize(
        "name",
        ["id", "ID", "_id", "product_id", "productId", "productID", "product[id]", "product-id"],
    )
    def test_id_fields(self, name):
        """Test that identifier field names are recognised."""
        assert is_id_field(name) is True

    @pytest.mark.parametrize("name", ["identity", "paid", "valid", "idea", "password"])
    def test_non_id_fields(self, name):
        """Test that words merely containing id are not identifiers."""
        assert is_id_field(name) is False


class TestValueHeuristics:
    """Tests for the value-based identifier checks."""

    def test_object_id(self):
        """Test ObjectId hex string detection."""
        assert is_object_id("5abbbacf04e4872d3ae344c1") is True
        assert is_object_id("5abbbacf04e4872d3ae344cz") is False
        assert is_object_id("foo") is False

    def test_cuid(self):
        """Test the loose CUID check."""
        assert is_cuid("cjld2cjxh0000qzrmn831i7rn") is True
        assert is_cuid("c4242-4242x4242*4242") is True
        assert is_cuid("c2345") is False
        assert is_cuid("abcdefgh") is False

    def test_uuid(self):
        """Test UUID detection for versions 1 to 5."""
        assert is_uuid("c51c80c2-66a1-442a-91e2-4f55b4256a72") is True
        assert is_uuid("C51C80C2-66A1-442A-91E2-4F55B4256A72") is True
        assert is_uuid("00000000-0000-0000-0000-000000000000") is False
        assert is_uuid("c51c80c2-66a1-642a-91e2-4f55b4256a72") is False


class TestIsIdentifierValue:
    """Tests for is_identifier_value function."""

    def test_all_checks_enabled(self):
        """Test that any heuristic may match."""
        options = MaskOptions()
        assert is_identifier_value("5abbbacf04e4872d3ae344c1", options) is True
        assert is_identifier_value("cjld2cjxh0000qzrmn831i7rn", options) is True
        assert is_identifier_value("not an id", options) is False

    def test_checks_can_be_disabled(self):
        """Test that each heuristic honours its switch."""
        options = MaskOptions(check_object_id=False, check_cuid=False, check_uuid=False)
        assert is_identifier_value("5abbbacf04e4872d3ae344c1", options) is False
        assert is_identifier_value("cjld2cjxh0000qzrmn831i7rn", options) is False
        assert is_identifier_value("c51c80c2-66a1-442a-91e2-4f55b4256a72", options) is False
