"""
passkit.web.params

Turns loosely typed query strings / JSON bodies into GenerationOptions,
counts and requirement maps. Defaults for unset fields live here, not in the
generator.
"""

from typing import Any, Dict, Mapping, Optional

from ..errors import InvalidCount, InvalidLength, InvalidRequirement
from ..options import MAX_COUNT, GenerationOptions

TRUE_STRINGS = frozenset({"1", "true", "on", "yes"})

# request key -> (GenerationOptions field, default)
BOOL_FIELDS = (
    ("includeUppercase", "include_uppercase", True),
    ("includeLowercase", "include_lowercase", True),
    ("includeNumbers", "include_numbers", True),
    ("includeSymbols", "include_symbols", False),
    ("excludeAmbiguous", "exclude_ambiguous", True),
    ("requireEach", "require_each", True),
)

DEFAULT_LENGTH = 16
DEFAULT_COUNT = 1

REQUIREMENT_FLAGS = ("requireUppercase", "requireLowercase", "requireNumbers", "requireSymbols")


def to_bool(value: Any, default: bool) -> bool:
    """true / "true" / 1 / "1" (and "on", "yes") are True; other values are False."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return False


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_generation_options(raw: Mapping[str, Any]) -> GenerationOptions:
    raw_length = raw.get("length")
    length = DEFAULT_LENGTH if raw_length is None else _to_int(raw_length)
    if length is None:
        raise InvalidLength(f"length must be an integer, got {raw_length!r}")

    kwargs: Dict[str, Any] = {
        attr: to_bool(raw.get(key), default) for key, attr, default in BOOL_FIELDS
    }

    exclude = raw.get("excludeChars")
    kwargs["exclude_chars"] = exclude if isinstance(exclude, str) and exclude else ""

    return GenerationOptions(length=length, **kwargs)


def parse_count(raw: Mapping[str, Any]) -> int:
    raw_count = raw.get("count")
    count = DEFAULT_COUNT if raw_count is None else _to_int(raw_count)
    if count is None or not 1 <= count <= MAX_COUNT:
        raise InvalidCount(f"count must be between 1 and {MAX_COUNT}, got {raw_count!r}")
    return count


def parse_requirements(raw: Any) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise InvalidRequirement("requirements must be an object")

    out: Dict[str, Any] = {}
    if raw.get("minLength") is not None:
        min_length = _to_int(raw["minLength"])
        if min_length is None or min_length < 0:
            raise InvalidRequirement(
                f"requirements.minLength must be a non-negative integer, got {raw['minLength']!r}",
                field="requirements.minLength",
            )
        out["minLength"] = min_length
    for flag in REQUIREMENT_FLAGS:
        if flag in raw:
            out[flag] = to_bool(raw[flag], False)
    return out
