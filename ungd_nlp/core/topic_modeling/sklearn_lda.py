from __future__ import annotations
from typing import Tuple

import numpy as np
from scipy import sparse
from sklearn.decomposition import LatentDirichletAllocation

from ungd_nlp.core.topic_modeling.base import TopicModeler


class SklearnLDAModeler(TopicModeler):
    """Batch variational Bayes LDA, stopped once perplexity moves less than ``tol``."""

    def _estimate(
        self, counts: sparse.csr_matrix
    ) -> Tuple[np.ndarray, np.ndarray, int, bool]:
        lda = LatentDirichletAllocation(
            n_components=self.cfg.num_topics,
            learning_method="batch",
            max_iter=self.cfg.max_iter,
            evaluate_every=1,
            perp_tol=self.tol,
            random_state=self.cfg.random_state,
        )
        doc_topic = lda.fit_transform(counts)  # shape: (n_docs, num_topics)
        # sklearn exits the loop early only when the perplexity check passed
        converged = lda.n_iter_ < self.cfg.max_iter
        return doc_topic, lda.components_, lda.n_iter_, converged
