from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.stats import rankdata

from ungd_nlp.messages import topic_messages as msg
from ungd_nlp.utils.exceptions import InvalidConfigurationError


@dataclass(frozen=True, eq=False)
class TopicModelResult:
    doc_ids: Tuple[str, ...]
    vocab: Tuple[str, ...]
    theta: np.ndarray  # documents x K, rows sum to 1
    beta: np.ndarray  # K x vocabulary, rows sum to 1
    backend: str
    n_iter: int
    converged: bool
    dropped_doc_ids: Tuple[str, ...] = ()
    _docvars: Optional[pd.DataFrame] = None
    effects: Optional[pd.DataFrame] = None

    @property
    def num_topics(self) -> int:
        return self.beta.shape[0]

    @property
    def topic_names(self) -> List[str]:
        return [f"Topic {i + 1}" for i in range(self.num_topics)]

    @property
    def docvars(self) -> pd.DataFrame:
        if self._docvars is None:
            return pd.DataFrame(index=pd.Index(self.doc_ids, name="doc_id"))
        return self._docvars.copy()

    def with_effects(self, effects: pd.DataFrame) -> "TopicModelResult":
        return replace(self, effects=effects)

    def _check_topic(self, topic: int) -> None:
        if not 0 <= topic < self.num_topics:
            raise InvalidConfigurationError(
                msg.UNKNOWN_TOPIC.format(topic=topic, k=self.num_topics)
            )

    def document_topics(self, with_docvars: bool = True) -> pd.DataFrame:
        out = pd.DataFrame(
            self.theta,
            index=pd.Index(self.doc_ids, name="doc_id"),
            columns=self.topic_names,
        )
        if with_docvars:
            out = self.docvars.join(out)
        return out

    def term_probabilities(self) -> pd.DataFrame:
        return pd.DataFrame(self.beta, index=self.topic_names, columns=list(self.vocab))

    def topic_shares(self) -> pd.Series:
        """Expected topic proportions over the corpus."""
        return pd.Series(self.theta.mean(axis=0), index=self.topic_names, name="share")

    def frex(self, weight: float = 0.5) -> np.ndarray:
        """
        FREX score per topic and term: weighted harmonic mean of a term's
        within-topic rank by exclusivity and by frequency.
        """
        exclusivity = self.beta / self.beta.sum(axis=0, keepdims=True)
        ncol = self.beta.shape[1]
        # empirical CDFs are taken within each topic, across the vocabulary
        ex_ecdf = np.vstack([rankdata(row, method="max") / ncol for row in exclusivity])
        fr_ecdf = np.vstack([rankdata(row, method="max") / ncol for row in self.beta])
        return 1.0 / (weight / ex_ecdf + (1 - weight) / fr_ecdf)

    def _top_idx(self, scores: np.ndarray, n: int) -> np.ndarray:
        # stable descending order, ties broken by vocabulary position
        return np.argsort(-scores, kind="stable")[:n]

    def label_topics(self, n: int = 7, frexweight: float = 0.5) -> pd.DataFrame:
        frex = self.frex(frexweight)
        rows = []
        for k in range(self.num_topics):
            rows.append(
                {
                    "topic": self.topic_names[k],
                    "prob": ", ".join(
                        self.vocab[j] for j in self._top_idx(self.beta[k], n)
                    ),
                    "frex": ", ".join(self.vocab[j] for j in self._top_idx(frex[k], n)),
                }
            )
        return pd.DataFrame(rows).set_index("topic")

    def top_terms(self, n: int = 10) -> pd.DataFrame:
        """Tidy frame (topic, term, beta, rank) of each topic's most probable terms."""
        rows = []
        for k in range(self.num_topics):
            for rank, j in enumerate(self._top_idx(self.beta[k], n), start=1):
                rows.append(
                    {
                        "topic": self.topic_names[k],
                        "term": self.vocab[j],
                        "beta": float(self.beta[k, j]),
                        "rank": rank,
                    }
                )
        return pd.DataFrame(rows)

    def top_documents(self, topic: int, n: int = 3) -> pd.Series:
        """Documents with the highest share of ``topic`` (0-based)."""
        self._check_topic(topic)
        idx = self._top_idx(self.theta[:, topic], n)
        return pd.Series(
            self.theta[idx, topic],
            index=pd.Index([self.doc_ids[i] for i in idx], name="doc_id"),
            name=self.topic_names[topic],
        )

    def diagnostics(self) -> dict:
        return {
            "backend": self.backend,
            "num_topics": self.num_topics,
            "n_iter": self.n_iter,
            "converged": self.converged,
            "documents": len(self.doc_ids),
            "dropped_documents": len(self.dropped_doc_ids),
            "vocabulary": len(self.vocab),
        }
