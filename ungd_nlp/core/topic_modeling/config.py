from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class TopicModelConfig:
    num_topics: int = 10
    backend: Literal["nmf", "lda", "gensim"] = "nmf"
    init: Literal["spectral", "random"] = "spectral"  # spectral: SVD-based, nmf only
    random_state: int = 1234
    max_iter: int = 500  # EM/variational iteration budget
    tol: Optional[float] = None  # None = backend default
    topn_words: int = 7  # words per topic (labels)
    # formula right-hand side, e.g. "year + C(continent)"; regressed on topic shares
    prevalence: Optional[str] = None


DEFAULT_TOL = {
    "nmf": 1e-4,  # relative KL decrease between checks
    "lda": 1e-1,  # absolute perplexity change between passes
    "gensim": 1e-4,  # relative log-perplexity change between passes
}
