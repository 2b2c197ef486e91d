from __future__ import annotations
import logging
from typing import Tuple

import numpy as np
from gensim import matutils, models
from scipy import sparse

from ungd_nlp.core.topic_modeling.base import TopicModeler

logger = logging.getLogger(__name__)


class GensimLDAModeler(TopicModeler):
    """Online LDA run pass by pass until the per-word bound stops moving."""

    def _estimate(
        self, counts: sparse.csr_matrix
    ) -> Tuple[np.ndarray, np.ndarray, int, bool]:
        corpus = list(matutils.Sparse2Corpus(counts, documents_columns=False))
        id2word = {i: str(i) for i in range(counts.shape[1])}

        lda = models.LdaModel(
            corpus=corpus,
            id2word=id2word,
            num_topics=self.cfg.num_topics,
            passes=1,
            random_state=self.cfg.random_state,
        )
        previous = lda.log_perplexity(corpus)
        n_iter, converged = 1, False
        while n_iter < self.cfg.max_iter:
            lda.update(corpus)
            n_iter += 1
            current = lda.log_perplexity(corpus)
            if abs(current - previous) <= self.tol * abs(previous):
                converged = True
                break
            previous = current

        doc_topic = np.zeros((len(corpus), self.cfg.num_topics))
        for i, bow in enumerate(corpus):
            for topic, prob in lda.get_document_topics(bow, minimum_probability=0.0):
                doc_topic[i, topic] = prob
        return doc_topic, lda.get_topics(), n_iter, converged
