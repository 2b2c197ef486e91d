from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenizationConfig:
    # drop tokens that are numbers ("1990", "3.5", "1,000")
    remove_numbers: bool = False
    # strip punctuation at token edges, drop pure punctuation
    remove_punct: bool = False
    remove_symbols: bool = False  # same for symbol characters ($, +, ©, ...)
    remove_url: bool = False  # drop http(s):// and www. tokens
    split_hyphens: bool = False  # "well-being" -> "well", "being"
    lowercase: bool = False  # usually left to the feature-matrix builder
