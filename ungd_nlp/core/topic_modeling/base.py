from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np
from scipy import sparse

from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.topic_modeling.config import DEFAULT_TOL, TopicModelConfig
from ungd_nlp.core.topic_modeling.result import TopicModelResult
from ungd_nlp.core.topic_modeling.utils import drop_empty_documents, normalize_rows
from ungd_nlp.messages import topic_messages as msg
from ungd_nlp.utils.exceptions import InvalidConfigurationError, NonConvergenceError

logger = logging.getLogger(__name__)


class TopicModeler(ABC):
    """
    Fits K topics to a trimmed feature matrix.

    Subclasses implement ``_estimate`` on the raw count matrix; validation,
    empty-document handling, normalisation and the convergence check live here.
    """

    supported_inits: Tuple[str, ...] = ("random",)

    def __init__(self, cfg: TopicModelConfig):
        self.cfg = cfg
        if cfg.num_topics < 2:
            raise InvalidConfigurationError(msg.TOO_FEW_TOPICS.format(k=cfg.num_topics))
        if cfg.init not in self.supported_inits:
            raise InvalidConfigurationError(
                msg.UNSUPPORTED_INIT.format(backend=cfg.backend, init=cfg.init)
            )
        if cfg.max_iter < 1:
            raise InvalidConfigurationError(
                msg.BAD_ITERATION_BUDGET.format(max_iter=cfg.max_iter)
            )

    @property
    def tol(self) -> float:
        if self.cfg.tol is not None:
            return self.cfg.tol
        return DEFAULT_TOL[self.cfg.backend]

    @abstractmethod
    def _estimate(
        self, counts: sparse.csr_matrix
    ) -> Tuple[np.ndarray, np.ndarray, int, bool]:
        """Returns (doc_topic weights, topic_term weights, iterations, converged)."""
        ...

    def fit(self, dfm: FeatureMatrix) -> TopicModelResult:
        fitted, dropped = drop_empty_documents(dfm)
        k = self.cfg.num_topics
        if k > min(fitted.ndoc, fitted.nfeat):
            raise InvalidConfigurationError(
                msg.TOO_MANY_TOPICS.format(k=k, ndoc=fitted.ndoc, nfeat=fitted.nfeat)
            )

        logger.info(
            f"Fitting {self.cfg.backend} with K={k} on {fitted.ndoc:,} documents "
            f"x {fitted.nfeat:,} terms "
            f"(init={self.cfg.init}, seed={self.cfg.random_state})"
        )
        doc_topic, topic_term, n_iter, converged = self._estimate(fitted.counts)
        if not converged:
            raise NonConvergenceError(
                msg.NOT_CONVERGED.format(
                    backend=self.cfg.backend, max_iter=self.cfg.max_iter
                ),
                n_iter=n_iter,
            )
        logger.info(f"{self.cfg.backend} converged after {n_iter} iterations")

        result = TopicModelResult(
            doc_ids=fitted.doc_ids,
            vocab=fitted.features,
            theta=normalize_rows(doc_topic),
            beta=normalize_rows(topic_term),
            backend=self.cfg.backend,
            n_iter=int(n_iter),
            converged=True,
            dropped_doc_ids=dropped,
            _docvars=fitted.docvars,
        )
        if self.cfg.prevalence:
            from ungd_nlp.core.topic_modeling.effects import estimate_effect

            result = result.with_effects(estimate_effect(result, self.cfg.prevalence))
        return result
