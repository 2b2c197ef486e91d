from __future__ import annotations
import logging
from typing import FrozenSet, List, Sequence, Set, Tuple

from ungd_nlp.core.stopword_removal.base import StopwordRemover
from ungd_nlp.core.stopword_removal.config import StopwordConfig

logger = logging.getLogger(__name__)


def _nltk_stopwords(language: str) -> Set[str]:
    import nltk
    from nltk.corpus import stopwords as nltk_stopwords

    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        logger.info("Downloading NLTK stopwords corpus")
        nltk.download("stopwords", quiet=True)
    return set(nltk_stopwords.words(language))


def _sklearn_stopwords() -> Set[str]:
    from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

    return set(ENGLISH_STOP_WORDS)


class DefaultStopwordRemover(StopwordRemover):
    def __init__(self, config: StopwordConfig | None = None):
        self.cfg = config or StopwordConfig()
        self._stopset = self._build_stopset()

    @property
    def stopwords(self) -> FrozenSet[str]:
        return frozenset(self._stopset)

    def _build_stopset(self) -> Set[str]:
        base: Set[str] = set()
        if self.cfg.source == "nltk":
            base |= _nltk_stopwords(self.cfg.language)
        elif self.cfg.source == "sklearn":
            base |= _sklearn_stopwords()

        base |= set(self.cfg.custom_stopwords)
        base -= set(self.cfg.exclude_stopwords)

        if self.cfg.preserve_negations:
            for w in ("no", "not", "never"):
                base.discard(w)

        if self.cfg.lowercase:
            base = {w.lower() for w in base}
        return base

    def remove(self, tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
        cleaned: List[str] = []
        removed: List[str] = []
        for t in tokens:
            norm = t.lower() if self.cfg.lowercase else t
            if norm in self._stopset:
                removed.append(t)
                continue
            cleaned.append(t)
        return cleaned, removed
