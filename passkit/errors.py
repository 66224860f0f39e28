"""
passkit.errors

Error taxonomy. Everything under GenerationError / RequestError is a
caller-input problem (HTTP 4xx); RandomSourceError is an internal fault.
"""

from typing import Optional


class PasskitError(Exception):
    """Root of all passkit errors."""

    code = "PasskitError"
    field: Optional[str] = None

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if field is not None:
            self.field = field

    def to_dict(self) -> dict:
        out = {"type": self.code, "message": self.message}
        if self.field:
            out["field"] = self.field
        return out


class GenerationError(PasskitError, ValueError):
    """Options cannot produce a valid password."""

    code = "GenerationError"


class InvalidLength(GenerationError):
    code = "InvalidLength"
    field = "length"


class NoActiveCategory(GenerationError):
    code = "NoActiveCategory"
    field = "includeUppercase,includeLowercase,includeNumbers,includeSymbols"


class CategoryExhausted(GenerationError):
    code = "CategoryExhausted"
    field = "excludeChars"

    def __init__(self, category: str):
        super().__init__(
            f"after applying exclusions the '{category}' category has no characters left"
        )
        self.category = category

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["category"] = self.category
        return out


class LengthTooSmallForCategories(GenerationError):
    code = "LengthTooSmallForCategories"
    field = "length"


class InvalidCount(GenerationError):
    code = "InvalidCount"
    field = "count"


class RequestError(PasskitError, ValueError):
    """Malformed request that never reached the generator or evaluator."""

    code = "RequestError"


class InvalidRequirement(RequestError):
    code = "InvalidRequirement"
    field = "requirements"


class MissingPassword(RequestError):
    code = "MissingPassword"
    field = "password"


class InvalidJson(RequestError):
    code = "InvalidJson"


class RandomSourceError(PasskitError, RuntimeError):
    """The secure random source failed; not the caller's fault."""

    code = "RandomSourceError"
