from __future__ import annotations
import warnings
from typing import Tuple

import numpy as np
from scipy import sparse
from sklearn.decomposition import NMF
from sklearn.exceptions import ConvergenceWarning

from ungd_nlp.core.topic_modeling.base import TopicModeler


class SklearnNMFModeler(TopicModeler):
    """
    Non-negative factorisation under Kullback-Leibler loss, which is the
    maximum-likelihood fit of a PLSA topic mixture. ``init="spectral"`` uses
    NNDSVDa, a deterministic SVD-based start.
    """

    supported_inits = ("spectral", "random")

    def _estimate(
        self, counts: sparse.csr_matrix
    ) -> Tuple[np.ndarray, np.ndarray, int, bool]:
        model = NMF(
            n_components=self.cfg.num_topics,
            init="nndsvda" if self.cfg.init == "spectral" else "random",
            solver="mu",
            beta_loss="kullback-leibler",
            max_iter=self.cfg.max_iter,
            tol=self.tol,
            random_state=self.cfg.random_state,
        )
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ConvergenceWarning)
            doc_topic = model.fit_transform(counts.astype(np.float64))
        converged = not any(issubclass(w.category, ConvergenceWarning) for w in caught)
        return doc_topic, model.components_, model.n_iter_, converged
