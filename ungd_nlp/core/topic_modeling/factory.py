from __future__ import annotations

from ungd_nlp.core.topic_modeling.base import TopicModeler
from ungd_nlp.core.topic_modeling.config import TopicModelConfig
from ungd_nlp.messages import topic_messages as msg
from ungd_nlp.utils.exceptions import InvalidConfigurationError


def modeler_for(cfg: TopicModelConfig) -> TopicModeler:
    backend = cfg.backend.lower()
    if backend == "nmf":
        from ungd_nlp.core.topic_modeling.sklearn_nmf import SklearnNMFModeler

        return SklearnNMFModeler(cfg)
    if backend == "lda":
        from ungd_nlp.core.topic_modeling.sklearn_lda import SklearnLDAModeler

        return SklearnLDAModeler(cfg)
    if backend == "gensim":
        from ungd_nlp.core.topic_modeling.gensim_lda import GensimLDAModeler

        return GensimLDAModeler(cfg)
    raise InvalidConfigurationError(msg.UNSUPPORTED_BACKEND.format(backend=cfg.backend))
