from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class DfmConfig:
    lowercase: bool = True
    stem: bool = True
    language: str = "english"  # Snowball stemmer language
