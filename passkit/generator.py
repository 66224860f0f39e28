"""
passkit.generator
Secure password generator. All draws go through a RandomSource, which
defaults to the OS CSPRNG (secrets module).
"""

import logging
from typing import List, Optional

from .errors import InvalidCount
from .options import MAX_COUNT, GenerationOptions
from .randomness import DEFAULT_SOURCE, RandomSource, draw

logger = logging.getLogger(__name__)


def _choice(rng: RandomSource, chars: str) -> str:
    return chars[draw(rng, len(chars))]


def _shuffle(rng: RandomSource, items: List[str]) -> None:
    """In-place Fisher-Yates."""
    for i in range(len(items) - 1, 0, -1):
        j = draw(rng, i + 1)
        items[i], items[j] = items[j], items[i]


def generate(options: Optional[GenerationOptions] = None, rng: Optional[RandomSource] = None) -> str:
    """
    Generate one password satisfying options.

    With require_each, one character is drawn from every active pool in the
    fixed order upper, lower, digits, symbols; the rest is filled from the
    combined pool with replacement, then the whole buffer is shuffled so the
    mandatory characters do not sit at the front.
    """
    options = options or GenerationOptions()
    rng = rng or DEFAULT_SOURCE

    pools = options.pools()
    all_chars = "".join(p.chars for p in pools)

    password_chars = []
    if options.require_each:
        for p in pools:
            password_chars.append(_choice(rng, p.chars))

    remaining = options.length - len(password_chars)
    for _ in range(remaining):
        password_chars.append(_choice(rng, all_chars))

    _shuffle(rng, password_chars)
    logger.debug(
        "generated password length=%d categories=%s pool_size=%d",
        options.length, ",".join(p.name for p in pools), len(all_chars),
    )
    return "".join(password_chars)


def generate_many(count: int, options: Optional[GenerationOptions] = None,
                  rng: Optional[RandomSource] = None) -> List[str]:
    """Generate count independent passwords (1..MAX_COUNT)."""
    if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= MAX_COUNT:
        raise InvalidCount(f"count must be between 1 and {MAX_COUNT}, got {count!r}")
    return [generate(options, rng) for _ in range(count)]
