from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd


class DocumentLoader(ABC):
    """Port: read a table of speeches from persisted storage."""

    @abstractmethod
    def load(self, path: str | Path) -> pd.DataFrame:
        """
        Returns a DataFrame with one row per document and at least the
        columns doc_id, text, country, session, year.
        """
        ...
