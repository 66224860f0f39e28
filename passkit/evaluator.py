"""
passkit.evaluator

Password strength evaluator:
- checks: which character classes appear, length, whether length meets minLength
- requirement validation against caller-supplied requirements
- score (0-100) from a length tier, character variety and a uniqueness bonus
- strength label derived from the score
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

DEFAULT_MIN_LENGTH = 8

# (minimum length, points), highest first
LENGTH_TIERS = ((20, 30), (16, 25), (12, 20), (8, 10))
SHORT_LENGTH_POINTS = 5

UPPER_POINTS = 15
LOWER_POINTS = 15
DIGIT_POINTS = 15
SYMBOL_POINTS = 20
UNIQUENESS_POINTS = 5

_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile(r"[^A-Za-z0-9]")

# requirement flag -> check it reads
REQUIREMENT_CHECKS = (
    ("requireUppercase", "hasUppercase"),
    ("requireLowercase", "hasLowercase"),
    ("requireNumbers", "hasNumbers"),
    ("requireSymbols", "hasSymbols"),
)


@dataclass
class StrengthReport:
    score: int
    strength: str
    checks: Dict[str, Any]
    requirement_results: Dict[str, bool] = field(default_factory=dict)
    passed: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "strength": self.strength,
            "checks": dict(self.checks),
            "requirementResults": dict(self.requirement_results),
            "passed": self.passed,
        }


def strength_label(score: int) -> str:
    if score >= 80:
        return "strong"
    if score >= 60:
        return "moderate"
    if score >= 40:
        return "weak"
    return "very_weak"


def compute_checks(password: str, min_length: int = DEFAULT_MIN_LENGTH) -> Dict[str, Any]:
    length = len(password)
    return {
        "hasUppercase": bool(_UPPER_RE.search(password)),
        "hasLowercase": bool(_LOWER_RE.search(password)),
        "hasNumbers": bool(_DIGIT_RE.search(password)),
        "hasSymbols": bool(_SYMBOL_RE.search(password)),
        "length": length,
        "minLength": length >= min_length,
    }


def compute_score(password: str, checks: Mapping[str, Any]) -> int:
    length = checks["length"]

    score = SHORT_LENGTH_POINTS
    for threshold, points in LENGTH_TIERS:
        if length >= threshold:
            score = points
            break

    if checks["hasUppercase"]:
        score += UPPER_POINTS
    if checks["hasLowercase"]:
        score += LOWER_POINTS
    if checks["hasNumbers"]:
        score += DIGIT_POINTS
    if checks["hasSymbols"]:
        score += SYMBOL_POINTS

    # few repeated characters -> up to 5 extra points
    score += (UNIQUENESS_POINTS * len(set(password))) // max(length, 1)

    return min(100, score)


def evaluate(password: str, requirements: Optional[Mapping[str, Any]] = None) -> StrengthReport:
    """
    Score password and check it against requirements.

    requirements may hold minLength (int) and the boolean flags
    requireUppercase, requireLowercase, requireNumbers, requireSymbols.
    Only minLength and flags that are set to a truthy value produce an entry
    in requirement_results; passed is the conjunction of those entries.
    """
    requirements = requirements or {}
    min_length = requirements.get("minLength")

    checks = compute_checks(
        password, DEFAULT_MIN_LENGTH if min_length is None else min_length
    )

    results: Dict[str, bool] = {}
    if min_length is not None:
        results["minLength"] = checks["length"] >= min_length
    for req, check in REQUIREMENT_CHECKS:
        if requirements.get(req):
            results[req] = checks[check]

    score = compute_score(password, checks)
    return StrengthReport(
        score=score,
        strength=strength_label(score),
        checks=checks,
        requirement_results=results,
        passed=all(results.values()),
    )
