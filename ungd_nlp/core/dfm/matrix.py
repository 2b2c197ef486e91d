from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import sparse

from ungd_nlp.messages import pipeline_messages as msg
from ungd_nlp.utils.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FeatureMatrix:
    """Sparse document-by-term counts with the docvars of its rows."""

    doc_ids: Tuple[str, ...]
    features: Tuple[str, ...]
    counts: sparse.csr_matrix
    _docvars: pd.DataFrame

    @property
    def ndoc(self) -> int:
        return len(self.doc_ids)

    @property
    def nfeat(self) -> int:
        return len(self.features)

    @property
    def docvars(self) -> pd.DataFrame:
        return self._docvars.copy()

    def docfreq(self) -> pd.Series:
        """Number of documents in which each term occurs at least once."""
        df = np.asarray((self.counts > 0).sum(axis=0)).ravel()
        return pd.Series(df, index=list(self.features), name="docfreq")

    def termfreq(self) -> pd.Series:
        tf = np.asarray(self.counts.sum(axis=0)).ravel()
        return pd.Series(tf, index=list(self.features), name="frequency")

    def rowsums(self) -> pd.Series:
        return pd.Series(
            np.asarray(self.counts.sum(axis=1)).ravel(),
            index=list(self.doc_ids),
            name="ntoken",
        )

    def topfeatures(self, n: int = 10) -> pd.Series:
        tf = self.termfreq()
        order = sorted(range(len(tf)), key=lambda i: (-tf.iat[i], tf.index[i]))
        return tf.iloc[order[:n]]

    def select_features(self, keep: Sequence[bool] | np.ndarray) -> "FeatureMatrix":
        keep = np.asarray(keep, dtype=bool)
        idx = np.flatnonzero(keep)
        return FeatureMatrix(
            doc_ids=self.doc_ids,
            features=tuple(self.features[i] for i in idx),
            counts=self.counts[:, idx].tocsr(),
            _docvars=self._docvars.copy(),
        )

    def subset(self, keep: Sequence[bool] | np.ndarray | pd.Series) -> "FeatureMatrix":
        keep = np.asarray(keep, dtype=bool)
        if keep.shape != (self.ndoc,):
            raise InvalidConfigurationError(
                msg.DOCVAR_LENGTH.format(
                    name="<mask>", got=keep.size, expected=self.ndoc
                )
            )
        idx = np.flatnonzero(keep)
        return FeatureMatrix(
            doc_ids=tuple(self.doc_ids[i] for i in idx),
            features=self.features,
            counts=self.counts[idx, :].tocsr(),
            _docvars=self._docvars.iloc[idx].copy(),
        )

    def group(self, by: str | Sequence[str]) -> "FeatureMatrix":
        """Sum document rows sharing the same value(s) of docvar(s) ``by``."""
        keys = [by] if isinstance(by, str) else list(by)
        for key in keys:
            if key not in self._docvars.columns:
                raise InvalidConfigurationError(msg.DOCVAR_MISSING.format(name=key))

        grouped_by = self._docvars.reset_index(drop=True).groupby(
            keys, sort=True, dropna=True
        )
        codes = grouped_by.ngroup().fillna(-1).astype(int).to_numpy()
        sizes = grouped_by.size()
        missing = codes < 0
        if missing.any():
            logger.warning(
                f"{int(missing.sum())} document(s) lack {keys} "
                "and are left out of grouping"
            )

        rows = np.flatnonzero(~missing)
        indicator = sparse.csr_matrix(
            (np.ones(len(rows), dtype=np.int64), (codes[rows], rows)),
            shape=(len(sizes), self.ndoc),
        )
        labels = [
            "|".join(map(str, k)) if isinstance(k, tuple) else str(k)
            for k in sizes.index
        ]
        docvars = sizes.index.to_frame(index=False)
        docvars["ndocs"] = sizes.to_numpy()
        docvars.index = pd.Index(labels, name="doc_id")
        return FeatureMatrix(
            doc_ids=tuple(labels),
            features=self.features,
            counts=(indicator @ self.counts).tocsr(),
            _docvars=docvars,
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.counts.toarray(),
            index=pd.Index(self.doc_ids, name="doc_id"),
            columns=list(self.features),
        )
