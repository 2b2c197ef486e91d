import matplotlib.pyplot as plt
import pandas as pd
import pytest
from matplotlib.figure import Figure

from ungd_nlp.core.topic_modeling.config import TopicModelConfig
from ungd_nlp.core.topic_modeling.factory import modeler_for
from ungd_nlp.reporting import charts
from ungd_nlp.utils.exceptions import EmptyResultError, InvalidConfigurationError


@pytest.fixture
def sentiment():
    return pd.DataFrame(
        {
            "continent": ["Europe", "Europe", "Africa", "Africa"],
            "year": [1990, 1991, 1990, 1991],
            "net_perc": [20.0, -5.0, 10.0, 35.0],
        }
    )


def test_frequency_charts(stemmed_dfm):
    for fig in (
        charts.plot_wordcloud(stemmed_dfm),
        charts.plot_frequency_lollipop(stemmed_dfm),
    ):
        assert isinstance(fig, Figure)
        plt.close(fig)


def test_topic_share_chart():
    shares = pd.DataFrame(
        {"defense": [60.0, 10.0], "economy": [40.0, 90.0]},
        index=pd.Index(["FRA", "USA"], name="group"),
    )
    fig = charts.plot_topic_shares(shares)
    assert fig.axes[0].get_title() == "Policy agenda by group"
    plt.close(fig)


def test_sentiment_charts(sentiment):
    fig = charts.plot_sentiment_by_continent(sentiment)
    assert len(fig.axes[0].get_lines()) >= 2
    plt.close(fig)

    by_country = sentiment.set_index(pd.Index(["FRA", "DEU", "GHA", "NGA"]))
    fig = charts.plot_sentiment_by_country(by_country)
    assert len(fig.axes[0].patches) == 4
    plt.close(fig)


def test_topic_term_chart(dfm):
    result = modeler_for(TopicModelConfig(num_topics=2, max_iter=1000)).fit(dfm)
    fig = charts.plot_topic_terms(result)
    assert [ax.get_title() for ax in fig.axes[:2]] == ["Topic 1", "Topic 2"]
    plt.close(fig)


def test_save_figure(tmp_path, stemmed_dfm):
    fig = charts.plot_frequency_lollipop(stemmed_dfm)
    path = charts.save_figure(fig, tmp_path / "figs" / "top.png")
    assert path.exists()
    assert path.stat().st_size > 0


# -------------------------------------
# ❌ Nothing to draw / wrong columns
# -------------------------------------
def test_empty_shares():
    with pytest.raises(EmptyResultError):
        charts.plot_topic_shares(pd.DataFrame())


def test_missing_sentiment_column(sentiment):
    with pytest.raises(InvalidConfigurationError):
        charts.plot_sentiment_by_continent(sentiment.drop(columns=["continent"]))
