from __future__ import annotations
import logging
import re
import unicodedata
from typing import List

from nltk.tokenize import WhitespaceTokenizer

from ungd_nlp.core.corpus.corpus import Corpus
from ungd_nlp.core.tokenization.base import Tokenizer
from ungd_nlp.core.tokenization.config import TokenizationConfig
from ungd_nlp.core.tokenization.tokens import Tokens

logger = logging.getLogger(__name__)

_URL = re.compile(r"^(?:https?://|ftp://|www\.)\S+$", re.IGNORECASE)
_NUMBER = re.compile(r"^[+-]?\d+(?:[.,]\d+)*%?$")
_HYPHENS = re.compile(r"[-‐‑]")


def _is_punct(ch: str) -> bool:
    return unicodedata.category(ch).startswith("P")


def _is_symbol(ch: str) -> bool:
    return unicodedata.category(ch).startswith("S")


def _strip_edges(token: str, pred) -> str:
    start, end = 0, len(token)
    while start < end and pred(token[start]):
        start += 1
    while end > start and pred(token[end - 1]):
        end -= 1
    return token[start:end]


class DefaultTokenizer(Tokenizer):
    """Adapter: whitespace tokenization (NLTK) followed by configurable removals."""

    def __init__(self, config: TokenizationConfig | None = None):
        self.cfg = config or TokenizationConfig()
        self._ws = WhitespaceTokenizer()

    def _edge_predicate(self):
        if self.cfg.remove_punct and self.cfg.remove_symbols:
            return lambda ch: _is_punct(ch) or _is_symbol(ch)
        if self.cfg.remove_punct:
            return _is_punct
        if self.cfg.remove_symbols:
            return _is_symbol
        return None

    def tokenize(self, text: str) -> List[str]:
        toks = self._ws.tokenize(text or "")
        if self.cfg.remove_url:
            # "(https://un.org)," is still a URL once its punctuation is stripped
            toks = [t for t in toks if not _URL.match(_strip_edges(t, _is_punct))]
        if self.cfg.split_hyphens:
            toks = [p for t in toks for p in _HYPHENS.split(t)]

        strip = self._edge_predicate()
        out: List[str] = []
        for t in toks:
            if strip is not None:
                t = _strip_edges(t, strip)
            if not t:
                continue
            if self.cfg.remove_numbers and _NUMBER.match(t):
                continue
            if self.cfg.lowercase:
                t = t.lower()
            out.append(t)
        return out


def tokenize_corpus(corpus: Corpus, tokenizer: Tokenizer | None = None) -> Tokens:
    tokenizer = tokenizer or DefaultTokenizer()
    tokens = Tokens.from_iterable(
        corpus.doc_ids,
        (tokenizer.tokenize(text) for _, text in corpus),
        corpus.docvars,
    )
    empty = tokens.empty_documents()
    if empty:
        logger.warning(f"{len(empty)} document(s) produced no tokens: {empty[:10]}")
    logger.info(
        f"Tokenized {len(tokens):,} documents ({int(tokens.ntoken().sum()):,} tokens)"
    )
    return tokens
