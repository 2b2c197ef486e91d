import numpy as np
import pandas as pd
import pytest

from ungd_nlp.core.dfm.builder import DfmBuilder
from ungd_nlp.core.dfm.config import DfmConfig
from ungd_nlp.core.stopword_removal.config import StopwordConfig
from ungd_nlp.core.stopword_removal.removal import DefaultStopwordRemover
from ungd_nlp.core.tokenization.tokens import Tokens
from ungd_nlp.utils.exceptions import EmptyResultError, InvalidConfigurationError


def _tokens(texts, countries=None):
    ids = [f"d{i}" for i in range(len(texts))]
    docvars = pd.DataFrame(
        {"country": countries or ["FRA"] * len(texts)},
        index=pd.Index(ids, name="doc_id"),
    )
    return Tokens.from_iterable(ids, [t.split() for t in texts], docvars)


def _builder(stopwords=("the",), stem=False):
    remover = DefaultStopwordRemover(
        StopwordConfig(source="none", custom_stopwords=frozenset(stopwords))
    )
    return DfmBuilder(DfmConfig(stem=stem), remover)


def test_docfreq_counts_documents_not_occurrences():
    dfm = _builder().build(_tokens(["the quick fox", "the lazy dog", "the quick dog"]))

    assert dfm.features == ("dog", "fox", "lazy", "quick")
    assert dfm.docfreq().to_dict() == {"dog": 2, "fox": 1, "lazy": 1, "quick": 2}
    assert "the" not in dfm.features


def test_termfreq_and_topfeatures():
    dfm = _builder().build(_tokens(["peace peace war", "peace aid", "aid war"]))

    assert dfm.termfreq().to_dict() == {"aid": 2, "peace": 3, "war": 2}
    # ties broken alphabetically
    assert dfm.topfeatures(3).index.tolist() == ["peace", "aid", "war"]


def test_lowercasing_merges_case_variants():
    dfm = _builder(stopwords=()).build(_tokens(["Peace peace PEACE"]))
    assert dfm.features == ("peace",)
    assert dfm.counts.toarray().tolist() == [[3]]


def test_stemming_applied_after_stopword_removal():
    dfm = _builder(stopwords=("nations",), stem=True).build(
        _tokens(["nations nation developing development"])
    )
    assert "nation" in dfm.features
    assert dfm.termfreq()["nation"] == 1
    assert "develop" in dfm.features


def test_group_sums_rows(dfm):
    grouped = dfm.group("country")

    assert grouped.ndoc == 6
    assert grouped.nfeat == dfm.nfeat
    assert grouped.counts.sum() == dfm.counts.sum()
    assert grouped.docvars.loc["FRA", "ndocs"] == 2
    fra_rows = [i for i, c in enumerate(dfm.docvars["country"]) if c == "FRA"]
    expected = np.asarray(dfm.counts[fra_rows].sum(axis=0)).ravel()
    fra = grouped.counts[grouped.doc_ids.index("FRA")].toarray().ravel()
    assert fra.tolist() == expected.tolist()


def test_group_by_two_docvars(dfm):
    grouped = dfm.group(["country", "session"])
    assert "FRA|40" in grouped.doc_ids
    assert list(grouped.docvars.columns) == ["country", "session", "ndocs"]


def test_subset_and_to_frame(dfm):
    sub = dfm.subset([i < 3 for i in range(dfm.ndoc)])
    frame = sub.to_frame()

    assert frame.shape == (3, dfm.nfeat)
    assert frame.index.tolist() == list(dfm.doc_ids[:3])
    assert len(sub.docvars) == 3


# -------------------------------------
# ❌ Empty vocabulary / unknown grouping
# -------------------------------------
def test_all_stopwords_is_empty():
    with pytest.raises(EmptyResultError):
        _builder().build(_tokens(["the the", "the"]))


def test_group_by_unknown_docvar(dfm):
    with pytest.raises(InvalidConfigurationError):
        dfm.group("continent")


def test_documents_without_features_keep_their_row(caplog):
    dfm = _builder().build(_tokens(["the", "peace talks"]))
    assert dfm.ndoc == 2
    assert dfm.rowsums().tolist() == [0, 2]
    assert "no features left" in caplog.text
