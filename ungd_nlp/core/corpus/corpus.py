from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd
import pycountry

from ungd_nlp.messages import pipeline_messages as msg
from ungd_nlp.utils.exceptions import DataLoadError, InvalidConfigurationError

logger = logging.getLogger(__name__)

_TEXT_COLUMNS = ("doc_id", "text")


@dataclass(frozen=True, eq=False)
class Corpus:
    """Ordered documents plus one metadata row (docvars) per document."""

    doc_ids: Tuple[str, ...]
    texts: Tuple[str, ...]
    _docvars: pd.DataFrame

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Corpus":
        docvars = df.drop(columns=list(_TEXT_COLUMNS)).copy()
        docvars.index = pd.Index(df["doc_id"].astype(str), name="doc_id")
        return cls(
            doc_ids=tuple(df["doc_id"].astype(str)),
            texts=tuple(df["text"].fillna("").astype(str)),
            _docvars=docvars,
        )

    def __len__(self) -> int:
        return len(self.doc_ids)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(zip(self.doc_ids, self.texts))

    @property
    def docvars(self) -> pd.DataFrame:
        return self._docvars.copy()

    def docvar(self, name: str) -> pd.Series:
        if name not in self._docvars.columns:
            raise InvalidConfigurationError(msg.DOCVAR_MISSING.format(name=name))
        return self._docvars[name].copy()

    def with_docvar(
        self, name: str, values: Sequence | Mapping[str, object]
    ) -> "Corpus":
        """Return a new corpus with one more docvar; existing ones are kept."""
        if name in self._docvars.columns:
            raise InvalidConfigurationError(msg.DOCVAR_EXISTS.format(name=name))

        if isinstance(values, Mapping):
            unknown = sorted(set(map(str, values)) - set(self.doc_ids))
            if unknown:
                raise InvalidConfigurationError(
                    msg.DOCVAR_UNKNOWN_IDS.format(name=name, ids=unknown[:10])
                )
            column = [values.get(d) for d in self.doc_ids]
        else:
            column = list(values)
            if len(column) != len(self):
                raise InvalidConfigurationError(
                    msg.DOCVAR_LENGTH.format(
                        name=name, got=len(column), expected=len(self)
                    )
                )

        docvars = self._docvars.copy()
        docvars[name] = column
        return Corpus(self.doc_ids, self.texts, docvars)

    def subset(self, mask: Sequence[bool] | pd.Series) -> "Corpus":
        keep = np.asarray(mask, dtype=bool)
        if keep.shape != (len(self),):
            raise InvalidConfigurationError(
                msg.DOCVAR_LENGTH.format(
                    name="<mask>", got=keep.size, expected=len(self)
                )
            )
        return Corpus(
            doc_ids=tuple(d for d, k in zip(self.doc_ids, keep) if k),
            texts=tuple(t for t, k in zip(self.texts, keep) if k),
            _docvars=self._docvars.loc[keep].copy(),
        )

    def summary(self) -> pd.DataFrame:
        # whitespace counts, the same unit the tokenizer splits on
        words = [t.split() for t in self.texts]
        out = self.docvars
        out.insert(0, "types", [len(set(w)) for w in words])
        out.insert(0, "tokens", [len(w) for w in words])
        return out


def country_name(code: str) -> str | None:
    try:
        return pycountry.countries.lookup(code).name
    except LookupError:
        return None


def add_country_names(
    corpus: Corpus, source: str = "country", name: str = "country_name"
) -> Corpus:
    codes = corpus.docvar(source)
    names = [country_name(str(c)) for c in codes]
    unknown = sorted({str(c) for c, n in zip(codes, names) if n is None})
    if unknown:
        logger.warning(f"No country name for code(s): {unknown}")
    return corpus.with_docvar(name, names)


def load_continent_lookup(path: str | Path) -> dict[str, str]:
    """Read a two-column csv (country, continent) into a mapping."""
    path = Path(path)
    if not path.exists():
        raise DataLoadError(msg.DATA_FILE_NOT_FOUND.format(path=path))
    try:
        df = pd.read_csv(path, dtype=str)
    except (ValueError, OSError) as e:
        raise DataLoadError(msg.DATA_UNREADABLE.format(path=path, error=e)) from e
    missing = [c for c in ("country", "continent") if c not in df.columns]
    if missing:
        raise DataLoadError(msg.DATA_COLUMNS_MISSING.format(columns=", ".join(missing)))
    return dict(zip(df["country"].str.strip(), df["continent"].str.strip()))


def add_continents(
    corpus: Corpus,
    lookup: Mapping[str, str],
    source: str = "country",
    name: str = "continent",
) -> Corpus:
    codes = corpus.docvar(source).astype(str)
    continents = [lookup.get(c) for c in codes]
    unmapped = sorted({c for c, v in zip(codes, continents) if v is None})
    if unmapped:
        logger.warning(
            f"{len(unmapped)} country code(s) have no continent: {unmapped[:20]}"
        )
    return corpus.with_docvar(name, continents)
