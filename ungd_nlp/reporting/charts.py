from __future__ import annotations
import logging
import math
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure
from wordcloud import WordCloud

from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.topic_modeling.result import TopicModelResult
from ungd_nlp.reporting.config import ChartConfig
from ungd_nlp.utils.exceptions import EmptyResultError, InvalidConfigurationError

logger = logging.getLogger(__name__)

_DEFAULT = ChartConfig()


def _require_rows(frame: pd.DataFrame | pd.Series, what: str) -> None:
    if len(frame) == 0:
        raise EmptyResultError(f"Nothing to plot for {what}.")


def _require_columns(frame: pd.DataFrame, *columns: str) -> None:
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise InvalidConfigurationError(f"Chart input lacks column(s): {missing}")


def plot_wordcloud(dfm: FeatureMatrix, cfg: ChartConfig = _DEFAULT) -> Figure:
    freqs = {t: int(c) for t, c in dfm.termfreq().items() if c > 0}
    if not freqs:
        raise EmptyResultError("Nothing to plot for the word cloud.")

    wc = WordCloud(
        width=cfg.wordcloud_width,
        height=cfg.wordcloud_height,
        background_color="white",
        max_words=cfg.wordcloud_max_words,
        collocations=False,
        random_state=0,
    ).generate_from_frequencies(freqs)

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.imshow(wc, interpolation="bilinear")
    ax.axis("off")
    fig.tight_layout()
    return fig


def plot_frequency_lollipop(dfm: FeatureMatrix, cfg: ChartConfig = _DEFAULT) -> Figure:
    top = dfm.topfeatures(cfg.top_n_features)
    _require_rows(top, "the frequency chart")
    top = top.iloc[::-1]  # largest at the top

    fig, ax = plt.subplots(figsize=(8, max(4, 0.35 * len(top))))
    pos = range(len(top))
    ax.hlines(y=list(pos), xmin=0, xmax=top.values, color="steelblue")
    ax.plot(top.values, list(pos), "o", color="steelblue")
    ax.set_yticks(list(pos))
    ax.set_yticklabels(top.index)
    ax.set_xlabel("Frequency")
    ax.set_ylabel("Feature")
    ax.set_title(f"Top {len(top)} features")
    fig.tight_layout()
    return fig


def plot_topic_shares(
    shares: pd.DataFrame,
    title: str = "Policy agenda by group",
    cfg: ChartConfig = _DEFAULT,
) -> Figure:
    """Stacked bars, one per row of ``shares`` (groups x categories, in percent)."""
    _require_rows(shares, "the topic-share chart")

    fig, ax = plt.subplots(figsize=cfg.figsize)
    shares.plot(kind="bar", stacked=True, ax=ax, colormap=cfg.colormap, width=0.8)
    ax.set_ylabel("Share of dictionary words (%)")
    ax.set_xlabel("")
    ax.set_title(title)
    ax.legend(bbox_to_anchor=(1.02, 1), loc="upper left", fontsize="small")
    plt.setp(ax.get_xticklabels(), rotation=30, ha="right")
    fig.tight_layout()
    return fig


def plot_sentiment_by_continent(
    sentiment: pd.DataFrame,
    continent: str = "continent",
    year: str = "year",
    value: str = "net_perc",
    cfg: ChartConfig = _DEFAULT,
) -> Figure:
    _require_columns(sentiment, continent, year, value)
    _require_rows(sentiment, "the continent sentiment chart")
    wide = sentiment.pivot_table(
        index=year, columns=continent, values=value, aggfunc="mean"
    )

    fig, ax = plt.subplots(figsize=cfg.figsize)
    wide.plot(ax=ax, marker="o", markersize=3)
    ax.axhline(0, color="grey", linewidth=0.8, linestyle="--")
    ax.set_xlabel("Year")
    ax.set_ylabel("Net sentiment (%)")
    ax.set_title("Net sentiment by continent")
    ax.legend(title=continent.capitalize())
    fig.tight_layout()
    return fig


def plot_sentiment_by_country(
    sentiment: pd.DataFrame, value: str = "net_perc", cfg: ChartConfig = _DEFAULT
) -> Figure:
    """Horizontal bars of ``value`` for the most positive and most negative rows."""
    _require_columns(sentiment, value)
    _require_rows(sentiment, "the country sentiment chart")
    ordered = sentiment[value].dropna().sort_values()
    half = cfg.top_n_countries // 2
    if len(ordered) > cfg.top_n_countries:
        ordered = pd.concat([ordered.head(half), ordered.tail(half)])

    colors = ["crimson" if v < 0 else "green" for v in ordered.values]
    fig, ax = plt.subplots(figsize=(8, max(4, 0.3 * len(ordered))))
    ax.barh([str(i) for i in ordered.index], ordered.values, color=colors)
    ax.axvline(0, color="grey", linewidth=0.8)
    ax.set_xlabel("Net sentiment (%)")
    ax.set_title("Net sentiment by country")
    fig.tight_layout()
    return fig


def plot_topic_terms(result: TopicModelResult, cfg: ChartConfig = _DEFAULT) -> Figure:
    terms = result.top_terms(cfg.top_n_terms)
    _require_rows(terms, "the topic term chart")

    k = result.num_topics
    ncols = min(3, k)
    nrows = math.ceil(k / ncols)
    fig, axes = plt.subplots(
        nrows, ncols, figsize=(4 * ncols, 3 * nrows), squeeze=False
    )
    for i, (topic, rows) in enumerate(terms.groupby("topic", sort=False)):
        ax = axes[i // ncols][i % ncols]
        rows = rows.sort_values("beta")
        ax.barh(rows["term"], rows["beta"], color=plt.get_cmap(cfg.colormap)(i % 20))
        ax.set_title(topic, fontsize="medium")
        ax.tick_params(axis="y", labelsize="small")
    for j in range(k, nrows * ncols):
        axes[j // ncols][j % ncols].axis("off")
    fig.supxlabel("Term probability (beta)")
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, cfg: ChartConfig = _DEFAULT) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=cfg.dpi, bbox_inches="tight")
    plt.close(fig)
    logger.info(f"✅ Figure saved to {path}")
    return path
