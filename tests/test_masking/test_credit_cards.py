"""Tests for credit-card detection."""

import pytest

from request_snapshot.masking.credit_cards import (
    CARD_BRANDS,
    find_card_brands,
    is_credit_card,
    mask_card_digits,
)


class TestIsCreditCard:
    """Tests for is_credit_card function."""

    @pytest.mark.parametrize(
        "value",
        [
            "4242424242424242",
            "4242-4242x4242*4242",
            "5555 5555 5555 4444",
            "3782 822 4631 0005",
            "35 30 11 13 33 30 00 00",
            "6011111111111117",
            "2200000000000004",
        ],
    )
    def test_card_numbers(self, value):
        """Test that numbers of known brands and lengths are detected."""
        assert is_credit_card(value) is True

    @pytest.mark.parametrize(
        "value",
        ["", "hello", "4242", "0000000000000000", "c2345", "12345678901234567890123"],
    )
    def test_non_card_numbers(self, value):
        """Test that other strings are not detected."""
        assert is_credit_card(value) is False

    def test_no_luhn_check(self):
        """Test that an invalid checksum is still treated as a card number."""
        assert is_credit_card("4242424242424241") is True


class TestFindCardBrands:
    """Tests for find_card_brands function."""

    def test_empty_digits_match_every_brand(self):
        """Test that no digits leaves every brand possible."""
        assert find_card_brands("") == list(CARD_BRANDS)

    def test_most_specific_brand_wins(self):
        """Test that a longer prefix beats a shorter one."""
        brands = find_card_brands("6011111111111117")
        assert [brand.name for brand in brands] == ["discover"]

    def test_partial_prefix_keeps_all_candidates(self):
        """Test that short input keeps brands it could still become."""
        names = [brand.name for brand in find_card_brands("4")]
        assert "visa" in names
        assert "elo" in names


class TestMaskCardDigits:
    """Tests for mask_card_digits function."""

    def test_separators_are_kept(self):
        """Test that only digits are replaced."""
        assert mask_card_digits("4242-4242x4242*4242") == "****-****x*********"
        assert mask_card_digits("3782 822 4631 0005") == "**** *** **** ****"
        assert mask_card_digits("35 30 11 13 33 30 00 00") == "** ** ** ** ** ** ** **"

    def test_custom_mask_char(self):
        """Test masking with another character."""
        assert mask_card_digits("4242 4242", "#") == "#### ####"
