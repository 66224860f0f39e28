import pytest

from passkit.errors import (
    CategoryExhausted,
    InvalidCount,
    InvalidLength,
    LengthTooSmallForCategories,
    NoActiveCategory,
    RandomSourceError,
)
from passkit import options
from passkit.generator import generate, generate_many
from passkit.options import AMBIGUOUS, DIGITS, LOWERCASE, SYMBOLS, UPPERCASE, GenerationOptions
from passkit.randomness import SeededRandomSource


class RecordingSource:
    """Wraps a seeded source and records every bound it was asked for."""

    def __init__(self, seed=0):
        self.inner = SeededRandomSource(seed)
        self.bounds = []

    def randbelow(self, n):
        self.bounds.append(n)
        return self.inner.randbelow(n)


class ZeroSource:
    def randbelow(self, n):
        return 0


class BrokenSource:
    def randbelow(self, n):
        raise OSError("entropy pool unavailable")


def test_default_options():
    pw = generate()
    assert len(pw) == 16
    assert any(c.isupper() for c in pw)
    assert any(c.islower() for c in pw)
    assert any(c.isdigit() for c in pw)
    assert not any(c in SYMBOLS for c in pw)
    assert not any(c in AMBIGUOUS for c in pw)


@pytest.mark.parametrize("length", [4, 5, 16, 64, 128])
def test_length_is_respected(length, rng):
    opts = GenerationOptions(length=length, include_symbols=True)
    assert len(generate(opts, rng)) == length


@pytest.mark.parametrize("length", [3, 129, 0, -1])
def test_out_of_range_length(length):
    with pytest.raises(InvalidLength):
        generate(GenerationOptions(length=length))


def test_no_active_category():
    with pytest.raises(NoActiveCategory):
        GenerationOptions(
            include_uppercase=False,
            include_lowercase=False,
            include_numbers=False,
            include_symbols=False,
        )


def test_require_each_covers_every_pool(rng):
    opts = GenerationOptions(length=4, include_symbols=True, exclude_chars="ABC")
    for _ in range(200):
        pw = generate(opts, rng)
        for pool in opts.pools():
            assert any(c in pool.chars for c in pw), (pool.name, pw)


def test_exclusions_never_appear(rng):
    opts = GenerationOptions(length=128, include_symbols=True, exclude_chars="aeiouXYZ!#")
    forbidden = set("aeiouXYZ!#") | AMBIGUOUS
    for _ in range(20):
        assert not forbidden & set(generate(opts, rng))


def test_ambiguous_allowed_when_not_excluded():
    opts = GenerationOptions(exclude_ambiguous=False)
    assert "I" in opts.pools()[0].chars
    assert "0" in opts.pools()[2].chars


def test_category_exhausted():
    with pytest.raises(CategoryExhausted) as exc:
        GenerationOptions(include_numbers=True, exclude_chars=DIGITS)
    assert exc.value.category == "digits"


def test_exhausted_only_counts_active_categories(rng):
    opts = GenerationOptions(include_numbers=False, exclude_chars=DIGITS)
    pw = generate(opts, rng)
    assert not any(c.isdigit() for c in pw)


def test_length_too_small_for_categories(monkeypatch):
    # unreachable with the shipped bounds (MIN_LENGTH 4, four categories)
    monkeypatch.setattr(options, "MIN_LENGTH", 2)
    with pytest.raises(LengthTooSmallForCategories):
        GenerationOptions(length=3, include_symbols=True)
    assert GenerationOptions(length=3, include_symbols=True, require_each=False).length == 3


def test_validation_order_length_first():
    with pytest.raises(InvalidLength):
        GenerationOptions(
            length=2,
            include_uppercase=False,
            include_lowercase=False,
            include_numbers=False,
        )


def test_without_require_each_draws_only_from_combined_pool():
    src = RecordingSource()
    opts = GenerationOptions(length=10, require_each=False)
    pool_size = len(opts.pools()[0].chars) + len(opts.pools()[1].chars) + len(opts.pools()[2].chars)
    generate(opts, src)
    fills, shuffle = src.bounds[:10], src.bounds[10:]
    assert fills == [pool_size] * 10
    assert shuffle == list(range(10, 1, -1))


def test_require_each_draw_order():
    src = RecordingSource()
    opts = GenerationOptions(length=8, include_symbols=True)
    sizes = [len(p.chars) for p in opts.pools()]
    generate(opts, src)
    # one draw per category in upper, lower, digits, symbols order, then the fill
    assert src.bounds[:4] == sizes
    assert src.bounds[4:8] == [sum(sizes)] * 4
    assert src.bounds[8:] == list(range(8, 1, -1))


def test_shuffle_is_fisher_yates():
    # with every draw returning 0 the buffer is rotated by the shuffle:
    # [U, L, D, fill...] -> first mandatory char ends up last
    opts = GenerationOptions(length=4, include_symbols=True)
    pools = opts.pools()
    pw = generate(opts, ZeroSource())
    assert pw == pools[1].chars[0] + pools[2].chars[0] + pools[3].chars[0] + pools[0].chars[0]


def test_seeded_source_is_deterministic():
    opts = GenerationOptions(length=24, include_symbols=True)
    assert generate(opts, SeededRandomSource(7)) == generate(opts, SeededRandomSource(7))


def test_random_source_failure_is_not_a_validation_error():
    with pytest.raises(RandomSourceError) as exc:
        generate(GenerationOptions(), BrokenSource())
    assert not isinstance(exc.value, ValueError)


def test_out_of_range_draw_is_rejected():
    class Bad:
        def randbelow(self, n):
            return n

    with pytest.raises(RandomSourceError):
        generate(GenerationOptions(), Bad())


def test_generate_many_count_and_validity(rng):
    opts = GenerationOptions(length=12, include_symbols=True, exclude_chars="xyz")
    passwords = generate_many(5, opts, rng)
    assert len(passwords) == 5
    for pw in passwords:
        assert len(pw) == 12
        assert not set("xyz") & set(pw)
        for pool in opts.pools():
            assert any(c in pool.chars for c in pw)
    assert len(set(passwords)) > 1


@pytest.mark.parametrize("count", [0, 51, -3])
def test_generate_many_invalid_count(count):
    with pytest.raises(InvalidCount):
        generate_many(count, GenerationOptions())


def test_generate_many_bounds():
    assert len(generate_many(1)) == 1
    assert len(generate_many(50, GenerationOptions(length=4))) == 50


def test_system_source_produces_distinct_passwords():
    opts = GenerationOptions(length=16)
    samples = {generate(opts) for _ in range(20)}
    # 16 chars over ~56 symbols: a collision among 20 draws is astronomically unlikely
    assert len(samples) == 20


def test_uniform_fill_distribution():
    # upper+lower without ambiguous: 24 + 24 characters, each drawn with replacement
    opts = GenerationOptions(length=128, include_numbers=False, require_each=False)
    rng = SeededRandomSource(99)
    counts = {}
    for _ in range(40):
        for c in generate(opts, rng):
            counts[c] = counts.get(c, 0) + 1
    assert set(counts) == set(opts.pools()[0].chars + opts.pools()[1].chars)
    expected = 40 * 128 / 48
    assert all(expected * 0.5 < n < expected * 1.5 for n in counts.values())


def test_base_alphabets():
    opts = GenerationOptions(include_symbols=True, exclude_ambiguous=False)
    assert [p.chars for p in opts.pools()] == [UPPERCASE, LOWERCASE, DIGITS, SYMBOLS]
