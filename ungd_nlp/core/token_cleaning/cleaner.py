from __future__ import annotations
import logging
from typing import List, Sequence, Tuple

from ungd_nlp.core.patterns import compile_matcher
from ungd_nlp.core.token_cleaning.base import TokenCleaner
from ungd_nlp.core.token_cleaning.config import PatternCleanConfig
from ungd_nlp.core.tokenization.tokens import Tokens

logger = logging.getLogger(__name__)


class PatternTokenCleaner(TokenCleaner):
    """Adapter: removes every token matching any configured pattern."""

    def __init__(self, config: PatternCleanConfig | None = None):
        self.cfg = config or PatternCleanConfig()
        # compiled eagerly so a bad pattern fails before any document is touched
        self._matches = compile_matcher(
            self.cfg.patterns, self.cfg.valuetype, self.cfg.case_insensitive
        )

    def clean(self, tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
        kept: List[str] = []
        removed: List[str] = []
        for t in tokens:
            (removed if self._matches(t) else kept).append(t)
        return kept, removed


def clean_tokens(tokens: Tokens, cleaner: TokenCleaner | None = None) -> Tokens:
    cleaner = cleaner or PatternTokenCleaner()
    out = tokens.map(lambda seq: cleaner.clean(seq)[0])

    removed = int(tokens.ntoken().sum() - out.ntoken().sum())
    newly_empty = sorted(set(out.empty_documents()) - set(tokens.empty_documents()))
    if newly_empty:
        logger.warning(
            f"{len(newly_empty)} document(s) reduced to zero tokens by cleaning: "
            f"{newly_empty[:10]}"
        )
    logger.info(f"Pattern cleaning removed {removed:,} tokens")
    return out
