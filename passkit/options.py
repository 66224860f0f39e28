"""
passkit.options

GenerationOptions: the validated, immutable input to the generator, plus the
character tables it draws from.
"""

import string
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, NamedTuple

from .errors import (
    CategoryExhausted,
    InvalidLength,
    LengthTooSmallForCategories,
    NoActiveCategory,
)

MIN_LENGTH = 4
MAX_LENGTH = 128
MAX_COUNT = 50

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{}|;:,.<>?"
AMBIGUOUS = frozenset("Il1O0o")

# category order matters: pools, require-each draws and the combined pool all follow it
CATEGORIES = (
    ("upper", "include_uppercase", UPPERCASE),
    ("lower", "include_lowercase", LOWERCASE),
    ("digits", "include_numbers", DIGITS),
    ("symbols", "include_symbols", SYMBOLS),
)


class CharacterPool(NamedTuple):
    name: str
    chars: str


def _as_charset(chars: Iterable[str]) -> FrozenSet[str]:
    if chars is None:
        return frozenset()
    out = set()
    for item in chars:
        if not isinstance(item, str):
            raise TypeError(f"exclude_chars must contain strings, got {type(item).__name__}")
        # "abc" inside a list counts as three characters
        out.update(item)
    return frozenset(out)


@dataclass(frozen=True)
class GenerationOptions:
    """
    Options for one generated password. Validation runs on construction, so
    an instance that exists can always be generated from.

    Checks, first failure wins: length bounds, at least one category, no
    category emptied by exclusions, length fits one char per category when
    require_each is set.
    """

    length: int = 16
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = False
    exclude_ambiguous: bool = True
    exclude_chars: FrozenSet[str] = field(default_factory=frozenset)
    require_each: bool = True

    def __post_init__(self):
        object.__setattr__(self, "exclude_chars", _as_charset(self.exclude_chars))

        if (
            isinstance(self.length, bool)
            or not isinstance(self.length, int)
            or not MIN_LENGTH <= self.length <= MAX_LENGTH
        ):
            raise InvalidLength(
                f"length must be between {MIN_LENGTH} and {MAX_LENGTH} characters, got {self.length!r}"
            )

        if not self.active_categories():
            raise NoActiveCategory(
                "at least one category must be enabled "
                "(includeUppercase, includeLowercase, includeNumbers, includeSymbols)"
            )

        pools = self.pools()

        if self.require_each and self.length < len(pools):
            raise LengthTooSmallForCategories(
                f"length ({self.length}) is smaller than the number of active categories ({len(pools)})"
            )

    def active_categories(self) -> List[str]:
        return [name for name, flag, _ in CATEGORIES if getattr(self, flag)]

    def exclusions(self) -> FrozenSet[str]:
        if self.exclude_ambiguous:
            return self.exclude_chars | AMBIGUOUS
        return self.exclude_chars

    def pools(self) -> List[CharacterPool]:
        """Active categories in fixed order, with excluded characters removed."""
        excluded = self.exclusions()
        pools = []
        for name, flag, alphabet in CATEGORIES:
            if not getattr(self, flag):
                continue
            chars = "".join(c for c in alphabet if c not in excluded)
            if not chars:
                raise CategoryExhausted(name)
            pools.append(CharacterPool(name, chars))
        return pools

    def to_dict(self) -> dict:
        return {
            "length": self.length,
            "includeUppercase": self.include_uppercase,
            "includeLowercase": self.include_lowercase,
            "includeNumbers": self.include_numbers,
            "includeSymbols": self.include_symbols,
            "excludeAmbiguous": self.exclude_ambiguous,
            "excludeChars": "".join(sorted(self.exclude_chars)),
            "requireEach": self.require_each,
        }
