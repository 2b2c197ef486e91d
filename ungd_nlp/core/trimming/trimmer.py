from __future__ import annotations
import logging
import math

from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.trimming.config import TrimConfig
from ungd_nlp.messages import analysis_messages as msg
from ungd_nlp.utils.exceptions import EmptyResultError, InvalidConfigurationError

logger = logging.getLogger(__name__)

_EPS = 1e-9


class DocfreqTrimmer:
    """Keeps terms whose share of documents lies in [min_docfreq, max_docfreq]."""

    def __init__(self, config: TrimConfig | None = None):
        self.cfg = config or TrimConfig()
        lo, hi = self.cfg.min_docfreq, self.cfg.max_docfreq
        if not (0.0 <= lo <= 1.0 and 0.0 <= hi <= 1.0):
            raise InvalidConfigurationError(msg.TRIM_BOUNDS.format(min=lo, max=hi))
        if lo > hi:
            raise InvalidConfigurationError(msg.TRIM_ORDER.format(min=lo, max=hi))

    def trim(self, dfm: FeatureMatrix) -> FeatureMatrix:
        if dfm.nfeat == 0 or dfm.ndoc == 0:
            raise EmptyResultError(msg.EMPTY_MATRIX)

        # proportions turned into document counts, so 0.075 x 40 is exactly 3 documents
        lo = max(math.ceil(self.cfg.min_docfreq * dfm.ndoc - _EPS), 1)
        hi = math.floor(self.cfg.max_docfreq * dfm.ndoc + _EPS)
        docfreq = dfm.docfreq().to_numpy()
        keep = (docfreq >= lo) & (docfreq <= hi)
        if self.cfg.min_termfreq is not None:
            keep &= dfm.termfreq().to_numpy() >= self.cfg.min_termfreq

        if not keep.any():
            raise EmptyResultError(
                msg.TRIM_EMPTY.format(
                    min=self.cfg.min_docfreq, max=self.cfg.max_docfreq
                )
            )

        trimmed = dfm.select_features(keep)
        logger.info(
            f"Trimmed features {dfm.nfeat:,} -> {trimmed.nfeat:,} "
            f"(docfreq in [{self.cfg.min_docfreq}, {self.cfg.max_docfreq}])"
        )
        emptied = [d for d, n in trimmed.rowsums().items() if n == 0]
        if emptied:
            logger.warning(
                f"{len(emptied)} document(s) have no terms after trimming: "
                f"{emptied[:10]}"
            )
        return trimmed


def trim_dfm(
    dfm: FeatureMatrix, min_docfreq: float = 0.0, max_docfreq: float = 1.0
) -> FeatureMatrix:
    config = TrimConfig(min_docfreq=min_docfreq, max_docfreq=max_docfreq)
    return DocfreqTrimmer(config).trim(dfm)
