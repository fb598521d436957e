"""Credit-card number detection.

A string is a card number when, after stripping every non-digit character,
the digits start with a known brand prefix and their count is one of that
brand's valid lengths. No Luhn check is made: test numbers and mistyped
numbers are just as sensitive as valid ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

Pattern = Union[int, tuple[int, int]]

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_DIGIT_RE = re.compile(r"[0-9]")


@dataclass(frozen=True)
class CardBrand:
    """A card brand: its issuer prefixes and allowed total lengths."""

    name: str
    patterns: tuple[Pattern, ...]
    lengths: tuple[int, ...]


CARD_BRANDS: tuple[CardBrand, ...] = (
    CardBrand("visa", (4,), (16, 18, 19)),
    CardBrand(
        "mastercard",
        ((51, 55), (2221, 2229), (223, 229), (23, 26), (270, 271), 2720),
        (16,),
    ),
    CardBrand("american-express", (34, 37), (15,)),
    CardBrand("diners-club", ((300, 305), 36, 38, 39), (14, 16, 19)),
    CardBrand("discover", (6011, (644, 649), 65), (16, 19)),
    CardBrand("jcb", (2131, 1800, (3528, 3589)), (16, 17, 18, 19)),
    CardBrand(
        "unionpay",
        (
            620,
            (624, 626),
            (62100, 62182),
            (62184, 62187),
            (62185, 62197),
            (62200, 62205),
            (622010, 622999),
            622018,
            (62207, 62209),
            (623, 626),
            6270,
            6272,
            6276,
            (627700, 627779),
            (627781, 627799),
            (6282, 6289),
            6291,
            6292,
            810,
            (8110, 8131),
            (8132, 8151),
            (8152, 8163),
            (8164, 8171),
        ),
        (14, 15, 16, 17, 18, 19),
    ),
    CardBrand(
        "maestro",
        (493698, (500000, 504174), (504176, 506698), (506779, 508999), (56, 59), 63, 67, 6),
        (12, 13, 14, 15, 16, 17, 18, 19),
    ),
    CardBrand(
        "elo",
        (
            401178,
            401179,
            438935,
            457631,
            457632,
            431274,
            451416,
            457393,
            504175,
            (506699, 506778),
            (509000, 509999),
            627780,
            636297,
            636368,
            (650031, 650033),
            (650035, 650051),
            (650405, 650439),
            (650485, 650538),
            (650541, 650598),
            (650700, 650718),
            (650720, 650727),
            (650901, 650978),
            (651652, 651679),
            (655000, 655019),
            (655021, 655058),
        ),
        (16,),
    ),
    CardBrand("mir", ((2200, 2204),), (16, 17, 18, 19)),
    CardBrand(
        "hiper",
        (637095, 63737423, 63743358, 637568, 637599, 637609, 637612),
        (16,),
    ),
    CardBrand("hipercard", (606282,), (16,)),
)


def _match_strength(digits: str, pattern: Pattern) -> int | None:
    """Return how many prefix digits a pattern pins down, or None on mismatch.

    A strength of 0 means the number is shorter than the pattern and only a
    partial prefix could be compared.
    """
    if isinstance(pattern, tuple):
        low, high = (str(bound) for bound in pattern)
        width = len(low)
        prefix = digits[:width]
        value = int(prefix)
        if not int(low[: len(prefix)]) <= value <= int(high[: len(prefix)]):
            return None
        return width if len(digits) >= width else 0

    text = str(pattern)
    if text[: len(digits)] != digits[: len(text)]:
        return None
    return len(text) if len(digits) >= len(text) else 0


def find_card_brands(digits: str) -> list[CardBrand]:
    """Return the candidate brands for a digit string.

    When every candidate matched a complete prefix only the most specific one
    is kept, so ``6011...`` is Discover rather than also Maestro.
    """
    if not digits:
        return list(CARD_BRANDS)

    candidates: list[tuple[CardBrand, int]] = []
    for brand in CARD_BRANDS:
        strengths = [
            strength
            for strength in (_match_strength(digits, pattern) for pattern in brand.patterns)
            if strength is not None
        ]
        if strengths:
            candidates.append((brand, max(strengths)))

    if candidates and all(strength > 0 for _, strength in candidates):
        best, best_strength = candidates[0]
        for brand, strength in candidates[1:]:
            if strength > best_strength:
                best, best_strength = brand, strength
        return [best]
    return [brand for brand, _ in candidates]


def is_credit_card(value: str) -> bool:
    """Return True if the digits of ``value`` form a plausible card number."""
    digits = _NON_DIGIT_RE.sub("", value)
    if not digits:
        return False
    return any(len(digits) in brand.lengths for brand in find_card_brands(digits))


def mask_card_digits(value: str, mask_char: str = "*") -> str:
    """Replace every digit with ``mask_char``, keeping separators verbatim."""
    return _DIGIT_RE.sub(mask_char, value)
