from __future__ import annotations
import logging
from typing import Literal, Sequence

import numpy as np
import pandas as pd

from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.dictionary.dictionary import Dictionary
from ungd_nlp.core.patterns import ValueType, compile_matcher
from ungd_nlp.messages import analysis_messages as msg
from ungd_nlp.utils.exceptions import DivisionUndefinedError, InvalidConfigurationError

logger = logging.getLogger(__name__)

ZeroPolicy = Literal["raise", "drop", "nan"]


class DictionaryScorer:
    """Re-aggregates term columns into dictionary category counts."""

    def __init__(self, valuetype: ValueType = "glob", case_insensitive: bool = True):
        self.valuetype = valuetype
        self.case_insensitive = case_insensitive

    def category_masks(self, features, dictionary: Dictionary) -> pd.DataFrame:
        """Boolean feature x category table; a term may belong to several categories."""
        cols = {}
        for cat, patterns in dictionary.categories.items():
            matches = compile_matcher(patterns, self.valuetype, self.case_insensitive)
            cols[cat] = [matches(f) for f in features]
        return pd.DataFrame(cols, index=list(features), dtype=bool)

    def score(
        self,
        dfm: FeatureMatrix,
        dictionary: Dictionary,
        group_by: str | Sequence[str] | None = None,
        with_docvars: bool = False,
    ) -> pd.DataFrame:
        """
        Documents (or groups of them) x categories. Each cell sums the counts
        of every term matching one of the category's patterns.
        """
        if group_by is not None:
            dfm = dfm.group(group_by)

        masks = self.category_masks(dfm.features, dictionary)
        scores = dfm.counts @ masks.to_numpy(dtype=np.int64)
        out = pd.DataFrame(
            np.asarray(scores),
            index=pd.Index(dfm.doc_ids, name="doc_id" if group_by is None else "group"),
            columns=dictionary.keys,
        )
        unmatched = int((~masks.any(axis=1)).sum())
        logger.info(
            f"Scored {dfm.ndoc:,} {'groups' if group_by else 'documents'} against "
            f"'{dictionary.name}'; {unmatched:,} of {dfm.nfeat:,} terms "
            "matched no category"
        )
        if with_docvars:
            docvars = dfm.docvars
            docvars.index = out.index
            out = docvars.join(out, rsuffix="_score")
        return out


def _guard_zero(
    frame: pd.DataFrame, total: pd.Series, on_zero: ZeroPolicy
) -> pd.DataFrame:
    if on_zero not in ("raise", "drop", "nan"):
        raise InvalidConfigurationError(msg.UNKNOWN_ZERO_POLICY.format(policy=on_zero))
    zero = total == 0
    if not zero.any():
        return frame
    rows = frame.index[zero].tolist()
    if on_zero == "raise":
        raise DivisionUndefinedError(msg.SENTIMENT_ZERO_TOTAL.format(rows=rows[:10]))
    logger.warning(
        f"{len(rows)} row(s) with a zero denominator "
        f"{'dropped' if on_zero == 'drop' else 'left undefined'}: {rows[:10]}"
    )
    if on_zero == "drop":
        return frame.loc[~zero]
    return frame


def sentiment_shares(
    scores: pd.DataFrame,
    positive: str = "positive",
    negative: str = "negative",
    on_zero: ZeroPolicy = "raise",
) -> pd.DataFrame:
    """
    Adds total_words, pos_perc, neg_perc and net_perc to a score frame.

    pos_perc = positive / (positive + negative) * 100, net_perc = pos_perc - neg_perc.
    Rows where positive + negative == 0 have no defined ratio; ``on_zero``
    decides whether they raise, are dropped, or are kept as NaN.
    """
    missing = [c for c in (positive, negative) if c not in scores.columns]
    if missing:
        raise InvalidConfigurationError(
            msg.SENTIMENT_CATEGORY_MISSING.format(columns=missing)
        )

    out = scores.copy()
    out["total_words"] = out[positive] + out[negative]
    out = _guard_zero(out, out["total_words"], on_zero)

    total = out["total_words"].astype(float).replace(0, np.nan)
    out["pos_perc"] = out[positive] / total * 100
    out["neg_perc"] = out[negative] / total * 100
    out["net_perc"] = out["pos_perc"] - out["neg_perc"]
    return out


def category_shares(scores: pd.DataFrame, on_zero: ZeroPolicy = "drop") -> pd.DataFrame:
    """Row-normalise category counts to percentages of the row's matched words."""
    total = scores.sum(axis=1)
    kept = _guard_zero(scores, total, on_zero)
    denom = kept.sum(axis=1).astype(float).replace(0, np.nan)
    return kept.div(denom, axis=0) * 100
