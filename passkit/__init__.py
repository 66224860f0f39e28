"""passkit: secure password generation and strength scoring."""

__version__ = "1.0.0"

from .errors import (  # noqa: E402
    CategoryExhausted,
    GenerationError,
    InvalidCount,
    InvalidLength,
    LengthTooSmallForCategories,
    NoActiveCategory,
    RandomSourceError,
)
from .evaluator import StrengthReport, evaluate  # noqa: E402
from .generator import generate, generate_many  # noqa: E402
from .options import GenerationOptions  # noqa: E402
