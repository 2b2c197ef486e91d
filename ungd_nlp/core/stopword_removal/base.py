from __future__ import annotations
from abc import ABC, abstractmethod
from typing import FrozenSet, List, Sequence, Tuple


class StopwordRemover(ABC):
    """Port: drop whole-word stopwords before features are stemmed and counted."""

    @property
    @abstractmethod
    def stopwords(self) -> FrozenSet[str]: ...

    @abstractmethod
    def remove(self, tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
        """
        Returns (kept_tokens, removed_stopwords), both in input order.
        """
        ...
