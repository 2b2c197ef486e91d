from __future__ import annotations
import logging
from typing import Tuple

import numpy as np

from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.messages import topic_messages as msg
from ungd_nlp.utils.exceptions import EmptyResultError

logger = logging.getLogger(__name__)


def drop_empty_documents(dfm: FeatureMatrix) -> Tuple[FeatureMatrix, Tuple[str, ...]]:
    # documents with no remaining terms carry no information for the model
    lengths = dfm.rowsums().to_numpy()
    keep = lengths > 0
    dropped = tuple(d for d, k in zip(dfm.doc_ids, keep) if not k)
    if not keep.any():
        raise EmptyResultError(msg.NO_DOCUMENTS)
    if dropped:
        logger.warning(
            f"Dropping {len(dropped)} empty document(s) before fitting: "
            f"{list(dropped)[:10]}"
        )
        dfm = dfm.subset(keep)
    return dfm, dropped


def normalize_rows(weights: np.ndarray) -> np.ndarray:
    """Scale rows to sum to 1; an all-zero row becomes uniform."""
    weights = np.asarray(weights, dtype=float)
    sums = weights.sum(axis=1, keepdims=True)
    uniform = np.full_like(weights, 1.0 / weights.shape[1])
    with np.errstate(invalid="ignore", divide="ignore"):
        out = np.where(sums > 0, weights / sums, uniform)
    return out
