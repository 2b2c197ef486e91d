from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Tuple

# OCR noise left in scanned speeches
DIGIT_HYPHEN_PATTERN = r"^[\d\-‐–]+$"
PUNCT_PATTERN = r"^[\W_]+$"
SHORT_TOKEN_PATTERN = r"^.{1,2}$"

OCR_NOISE_PATTERNS: Tuple[str, ...] = (
    DIGIT_HYPHEN_PATTERN,
    PUNCT_PATTERN,
    SHORT_TOKEN_PATTERN,
)


@dataclass(frozen=True)
class PatternCleanConfig:
    patterns: Tuple[str, ...] = OCR_NOISE_PATTERNS
    valuetype: Literal["regex", "fixed", "glob"] = "regex"
    case_insensitive: bool = True
