import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from ungd_nlp.core.corpus.corpus import Corpus  # noqa: E402
from ungd_nlp.core.dfm.builder import DfmBuilder  # noqa: E402
from ungd_nlp.core.dfm.config import DfmConfig  # noqa: E402
from ungd_nlp.core.stopword_removal.config import StopwordConfig  # noqa: E402
from ungd_nlp.core.stopword_removal.removal import DefaultStopwordRemover  # noqa: E402
from ungd_nlp.core.tokenization.config import TokenizationConfig  # noqa: E402
from ungd_nlp.core.tokenization.tokenizer import (  # noqa: E402
    DefaultTokenizer,
    tokenize_corpus,
)

SMALL_STOPWORDS = frozenset(
    {
        "the", "and", "of", "to", "in", "a", "we",
        "our", "is", "for", "all", "must", "this",
    }
)

PEACE_TEXTS = [
    "The nuclear disarmament of all weapons is vital for peace and security.",
    "We call for disarmament, an end to nuclear weapons and lasting peace.",
    "Security and peace require disarmament and the control of weapons.",
    "Nuclear weapons threaten peace; disarmament must continue.",
    "Peace and security depend on weapons control and disarmament talks.",
    "Disarmament of nuclear arsenals brings security and peace.",
]
ECONOMY_TEXTS = [
    "Trade and economic development reduce poverty in developing economies.",
    "Economic growth, fair trade and development investment are needed.",
    "Poverty falls when trade, investment and development grow.",
    "Development finance and trade support economic growth.",
    "Our economic development depends on trade and investment.",
    "Fair trade helps development and ends poverty through growth.",
]


@pytest.fixture
def speeches_frame() -> pd.DataFrame:
    texts = PEACE_TEXTS + ECONOMY_TEXTS
    countries = ["FRA", "USA", "GHA", "IND", "BRA", "JPN"] * 2
    return pd.DataFrame(
        {
            "doc_id": [
                f"{c}_{40 + i // 6}_{1985 + i}" for i, c in enumerate(countries)
            ],
            "text": texts,
            "country": countries,
            "session": [40 + i // 6 for i in range(len(texts))],
            "year": [1985 + i for i in range(len(texts))],
        }
    )


@pytest.fixture
def corpus(speeches_frame) -> Corpus:
    return Corpus.from_frame(speeches_frame)


@pytest.fixture
def small_remover() -> DefaultStopwordRemover:
    return DefaultStopwordRemover(
        StopwordConfig(source="none", custom_stopwords=SMALL_STOPWORDS)
    )


@pytest.fixture
def tokens(corpus):
    tokenizer = DefaultTokenizer(TokenizationConfig(remove_punct=True))
    return tokenize_corpus(corpus, tokenizer)


@pytest.fixture
def dfm(tokens, small_remover):
    return DfmBuilder(DfmConfig(stem=False), small_remover).build(tokens)


@pytest.fixture
def stemmed_dfm(tokens, small_remover):
    return DfmBuilder(DfmConfig(stem=True), small_remover).build(tokens)
