from __future__ import annotations
import logging

import pandas as pd
import statsmodels.formula.api as smf
from patsy import PatsyError

from ungd_nlp.core.topic_modeling.result import TopicModelResult
from ungd_nlp.utils.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)

_OUTCOME = "topic_share"


def estimate_effect(result: TopicModelResult, formula: str) -> pd.DataFrame:
    """
    Regress each topic's document proportions on document metadata.

    ``formula`` is a patsy right-hand side such as ``"year + C(continent)"``.
    Returns one row per (topic, term) with estimate, std_error, t and p_value.
    """
    data = result.docvars.reset_index(drop=True)
    rows = []
    for k, name in enumerate(result.topic_names):
        frame = data.assign(**{_OUTCOME: result.theta[:, k]})
        try:
            fit = smf.ols(f"{_OUTCOME} ~ {formula}", data=frame).fit()
        except (PatsyError, KeyError, ValueError) as e:
            raise InvalidConfigurationError(
                f"Cannot estimate topic prevalence with '{formula}': {e}"
            ) from e
        for term in fit.params.index:
            rows.append(
                {
                    "topic": name,
                    "term": term,
                    "estimate": fit.params[term],
                    "std_error": fit.bse[term],
                    "t": fit.tvalues[term],
                    "p_value": fit.pvalues[term],
                }
            )
    logger.info(
        f"Estimated prevalence effects '{formula}' for {result.num_topics} topics"
    )
    return pd.DataFrame(rows)
