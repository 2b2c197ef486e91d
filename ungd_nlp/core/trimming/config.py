from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrimConfig:
    min_docfreq: float = 0.0  # proportion of documents, inclusive
    max_docfreq: float = 1.0  # proportion of documents, inclusive
    min_termfreq: Optional[int] = None  # total count across the corpus
