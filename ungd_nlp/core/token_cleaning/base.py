from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple


class TokenCleaner(ABC):
    """Port: drop noise tokens (OCR debris, stray digits, fragments) by pattern."""

    @abstractmethod
    def clean(self, tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
        """
        Returns (kept_tokens, removed_tokens), both in original order.
        """
        ...
