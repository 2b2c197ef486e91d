from __future__ import annotations
import logging
from typing import List, Sequence

import numpy as np
from nltk.stem.snowball import SnowballStemmer
from sklearn.feature_extraction.text import CountVectorizer

from ungd_nlp.core.dfm.config import DfmConfig
from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.stopword_removal.base import StopwordRemover
from ungd_nlp.core.stopword_removal.removal import DefaultStopwordRemover
from ungd_nlp.core.tokenization.tokens import Tokens
from ungd_nlp.messages import analysis_messages as msg
from ungd_nlp.utils.exceptions import EmptyResultError

logger = logging.getLogger(__name__)


def _pretokenized(doc: List[str]) -> List[str]:
    return doc


class DfmBuilder:
    """
    Lowercase -> drop stopwords -> stem -> count.

    Stopwords are dropped before stemming so the list is matched against
    whole words, and never show up as columns.
    """

    def __init__(
        self,
        config: DfmConfig | None = None,
        remover: StopwordRemover | None = None,
    ):
        self.cfg = config or DfmConfig()
        self.remover = remover or DefaultStopwordRemover()
        self._stemmer = SnowballStemmer(self.cfg.language) if self.cfg.stem else None

    def features_for(self, tokens: Sequence[str]) -> List[str]:
        toks = [t.lower() for t in tokens] if self.cfg.lowercase else list(tokens)
        toks, _ = self.remover.remove(toks)
        if self._stemmer is not None:
            # ignore_stopwords stays False: the remover already decided
            toks = [self._stemmer.stem(t) for t in toks]
        return toks

    def build(self, tokens: Tokens) -> FeatureMatrix:
        docs = [self.features_for(seq) for _, seq in tokens]
        vectorizer = CountVectorizer(
            analyzer=_pretokenized, lowercase=False, dtype=np.int64
        )
        try:
            counts = vectorizer.fit_transform(docs)
        except ValueError as e:  # empty vocabulary
            raise EmptyResultError(msg.EMPTY_MATRIX) from e

        dfm = FeatureMatrix(
            doc_ids=tokens.doc_ids,
            features=tuple(vectorizer.get_feature_names_out()),
            counts=counts.tocsr(),
            _docvars=tokens.docvars,
        )
        empty = [d for d, n in dfm.rowsums().items() if n == 0]
        if empty:
            logger.warning(
                f"{len(empty)} document(s) have no features left: {empty[:10]}"
            )
        logger.info(
            f"Built feature matrix: {dfm.ndoc:,} documents x {dfm.nfeat:,} features"
        )
        return dfm
