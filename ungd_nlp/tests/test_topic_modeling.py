import numpy as np
import pandas as pd
import pytest
from scipy import sparse

from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.topic_modeling.config import TopicModelConfig
from ungd_nlp.core.topic_modeling.effects import estimate_effect
from ungd_nlp.core.topic_modeling.factory import modeler_for
from ungd_nlp.utils.exceptions import (
    EmptyResultError,
    InvalidConfigurationError,
    NonConvergenceError,
)


def _fit(dfm, **overrides):
    params = {"num_topics": 2, "max_iter": 1000}
    params.update(overrides)
    return modeler_for(TopicModelConfig(**params)).fit(dfm)


def test_nmf_spectral_is_deterministic(dfm):
    first = _fit(dfm)
    second = _fit(dfm)

    assert np.array_equal(first.theta, second.theta)
    assert np.array_equal(first.beta, second.beta)
    assert first.converged
    assert first.backend == "nmf"


def test_proportions_are_distributions(dfm):
    result = _fit(dfm, num_topics=3)

    assert result.theta.shape == (dfm.ndoc, 3)
    assert result.beta.shape == (3, dfm.nfeat)
    assert np.allclose(result.theta.sum(axis=1), 1.0)
    assert np.allclose(result.beta.sum(axis=1), 1.0)
    assert (result.theta >= 0).all() and (result.beta >= 0).all()


def test_two_themes_are_separated(dfm):
    result = _fit(dfm)
    dominant = result.theta.argmax(axis=1)
    # first six speeches are about disarmament, the last six about trade
    assert len(set(dominant[:6])) == 1
    assert len(set(dominant[6:])) == 1
    assert dominant[0] != dominant[6]


def test_random_init_with_seed_is_reproducible(dfm):
    a = _fit(dfm, init="random", random_state=7)
    b = _fit(dfm, init="random", random_state=7)
    assert np.array_equal(a.theta, b.theta)


def test_sklearn_lda_backend(dfm):
    result = _fit(dfm, backend="lda", init="random")
    assert result.backend == "lda"
    assert np.allclose(result.theta.sum(axis=1), 1.0)


def test_gensim_backend(dfm):
    result = _fit(dfm, backend="gensim", init="random", max_iter=300, tol=1e-2)
    assert result.backend == "gensim"
    assert result.n_iter >= 2
    assert np.allclose(result.theta.sum(axis=1), 1.0)
    assert np.allclose(result.beta.sum(axis=1), 1.0)


def test_empty_documents_are_dropped_before_fitting(dfm):
    ids = dfm.doc_ids + ("EMPTY_1_2000",)
    docvars = pd.concat(
        [
            dfm.docvars,
            pd.DataFrame(
                {"country": ["XXX"]}, index=pd.Index(["EMPTY_1_2000"], name="doc_id")
            ),
        ]
    )
    padded = FeatureMatrix(
        doc_ids=ids,
        features=dfm.features,
        counts=sparse.vstack(
            [dfm.counts, sparse.csr_matrix((1, dfm.nfeat), dtype=np.int64)]
        ).tocsr(),
        _docvars=docvars,
    )

    result = _fit(padded)

    assert result.dropped_doc_ids == ("EMPTY_1_2000",)
    assert "EMPTY_1_2000" not in result.doc_ids
    assert len(result.docvars) == dfm.ndoc


# -------------------------------------
# ❌ Invalid configuration / non-convergence
# -------------------------------------
@pytest.mark.parametrize("k", [0, 1])
def test_fewer_than_two_topics(k):
    with pytest.raises(InvalidConfigurationError):
        modeler_for(TopicModelConfig(num_topics=k))


def test_more_topics_than_documents(dfm):
    with pytest.raises(InvalidConfigurationError):
        _fit(dfm, num_topics=dfm.ndoc + 1)


def test_spectral_init_only_for_nmf():
    with pytest.raises(InvalidConfigurationError):
        modeler_for(TopicModelConfig(backend="lda", init="spectral"))


def test_unknown_backend():
    with pytest.raises(InvalidConfigurationError):
        modeler_for(TopicModelConfig(backend="stm"))


def test_zero_iteration_budget():
    with pytest.raises(InvalidConfigurationError):
        modeler_for(TopicModelConfig(max_iter=0))


@pytest.mark.parametrize("backend, init", [("nmf", "spectral"), ("lda", "random")])
def test_non_convergence_is_an_error(dfm, backend, init):
    with pytest.raises(NonConvergenceError) as exc:
        _fit(dfm, backend=backend, init=init, max_iter=1)
    assert exc.value.code == "NON_CONVERGENCE"
    assert exc.value.n_iter == 1


def test_all_documents_empty():
    ids = ("a", "b")
    empty = FeatureMatrix(
        doc_ids=ids,
        features=("peace", "war"),
        counts=sparse.csr_matrix((2, 2), dtype=np.int64),
        _docvars=pd.DataFrame(index=pd.Index(ids, name="doc_id")),
    )
    with pytest.raises(EmptyResultError):
        _fit(empty)


# -------------------------------------
# Result views
# -------------------------------------
def test_label_topics_and_top_terms(dfm):
    result = _fit(dfm)

    labels = result.label_topics(n=4)
    assert labels.index.tolist() == ["Topic 1", "Topic 2"]
    assert list(labels.columns) == ["prob", "frex"]
    assert len(labels.loc["Topic 1", "prob"].split(", ")) == 4

    terms = result.top_terms(5)
    assert len(terms) == 10
    assert terms.groupby("topic")["rank"].apply(list).tolist() == [[1, 2, 3, 4, 5]] * 2
    first = terms[terms["topic"] == "Topic 1"]["beta"].tolist()
    assert first == sorted(first, reverse=True)


def test_frex_scores_are_bounded(dfm):
    frex = _fit(dfm).frex(0.5)
    assert frex.shape == (2, dfm.nfeat)
    assert ((frex > 0) & (frex <= 1)).all()


def test_document_views(dfm):
    result = _fit(dfm)

    doc_topics = result.document_topics()
    assert list(doc_topics.columns[-2:]) == ["Topic 1", "Topic 2"]
    assert "country" in doc_topics.columns
    assert np.isclose(result.topic_shares().sum(), 1.0)

    top = result.top_documents(0, n=3)
    assert len(top) == 3
    assert top.is_monotonic_decreasing
    with pytest.raises(InvalidConfigurationError):
        result.top_documents(5)

    diag = result.diagnostics()
    assert diag["num_topics"] == 2
    assert diag["documents"] == dfm.ndoc


# -------------------------------------
# Prevalence covariates
# -------------------------------------
def test_estimate_effect(dfm):
    result = _fit(dfm)
    effects = estimate_effect(result, "year")

    assert list(effects.columns) == [
        "topic", "term", "estimate", "std_error", "t", "p_value"
    ]
    assert set(effects["term"]) == {"Intercept", "year"}
    assert len(effects) == 4


def test_prevalence_in_config_attaches_effects(dfm):
    result = _fit(dfm, prevalence="year + C(session)")
    assert result.effects is not None
    assert set(result.effects["topic"]) == {"Topic 1", "Topic 2"}


def test_unknown_covariate(dfm):
    with pytest.raises(InvalidConfigurationError):
        estimate_effect(_fit(dfm), "continent")


def test_results_compare_by_identity(dfm):
    result = _fit(dfm)
    with_effects = result.with_effects(pd.DataFrame())

    assert result == result
    assert result != with_effects
    assert len({result, with_effects}) == 2
