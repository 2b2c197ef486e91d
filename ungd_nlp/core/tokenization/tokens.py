from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence, Tuple

import pandas as pd


@dataclass(frozen=True, eq=False)
class Tokens:
    """Token sequences per document; every transformation returns a new instance."""

    doc_ids: Tuple[str, ...]
    sequences: Tuple[Tuple[str, ...], ...]
    _docvars: pd.DataFrame

    @classmethod
    def from_iterable(
        cls,
        doc_ids: Sequence[str],
        sequences: Iterable[Iterable[str]],
        docvars: pd.DataFrame,
    ) -> "Tokens":
        return cls(tuple(doc_ids), tuple(tuple(s) for s in sequences), docvars.copy())

    def __len__(self) -> int:
        return len(self.doc_ids)

    def __iter__(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        return iter(zip(self.doc_ids, self.sequences))

    def __getitem__(self, doc_id: str) -> Tuple[str, ...]:
        return self.sequences[self.doc_ids.index(doc_id)]

    @property
    def docvars(self) -> pd.DataFrame:
        return self._docvars.copy()

    def ntoken(self) -> pd.Series:
        return pd.Series(
            [len(s) for s in self.sequences], index=list(self.doc_ids), name="ntoken"
        )

    def empty_documents(self) -> list[str]:
        return [d for d, s in self if not s]

    def map(self, fn: Callable[[Tuple[str, ...]], Iterable[str]]) -> "Tokens":
        """Apply ``fn`` to each document's tokens, lazily consumed in document order."""
        return Tokens.from_iterable(
            self.doc_ids, (fn(s) for s in self.sequences), self._docvars
        )
