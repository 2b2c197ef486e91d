from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from ungd_nlp.core.corpus.corpus import (
    Corpus,
    add_continents,
    add_country_names,
    load_continent_lookup,
)
from ungd_nlp.core.dfm.builder import DfmBuilder
from ungd_nlp.core.dfm.config import DfmConfig
from ungd_nlp.core.dfm.matrix import FeatureMatrix
from ungd_nlp.core.dictionary.dictionary import load_dictionary
from ungd_nlp.core.dictionary.scorer import (
    DictionaryScorer,
    category_shares,
    sentiment_shares,
)
from ungd_nlp.core.loading.base import DocumentLoader
from ungd_nlp.core.loading.loader import TabularDocumentLoader
from ungd_nlp.core.stopword_removal.removal import DefaultStopwordRemover
from ungd_nlp.core.token_cleaning.cleaner import PatternTokenCleaner, clean_tokens
from ungd_nlp.core.tokenization.tokenizer import DefaultTokenizer, tokenize_corpus
from ungd_nlp.core.tokenization.tokens import Tokens
from ungd_nlp.core.topic_modeling.factory import modeler_for
from ungd_nlp.core.topic_modeling.result import TopicModelResult
from ungd_nlp.core.trimming.trimmer import DocfreqTrimmer
from ungd_nlp.messages import pipeline_messages as msg
from ungd_nlp.reporting import charts
from ungd_nlp.schemas.pipeline import PipelineRunConfig
from ungd_nlp.utils.telemetry import step

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PipelineArtifacts:
    """One named, never-reused output per stage."""

    corpus: Corpus
    tokens: Tokens
    cleaned_tokens: Tokens
    dfm: FeatureMatrix  # stemmed, for frequencies and the topic model
    agenda_dfm: FeatureMatrix  # unstemmed, for dictionary lookups
    agenda_scores: pd.DataFrame
    agenda_shares: pd.DataFrame
    sentiment_scores: pd.DataFrame  # per country
    continent_sentiment: Optional[pd.DataFrame]  # per continent and year
    trimmed_dfm: FeatureMatrix
    topic_model: TopicModelResult
    figures: Dict[str, Path] = field(default_factory=dict)


class SpeechAnalysisPipeline:
    """
    load -> corpus -> tokens -> cleaned tokens -> dfm -> {agenda, sentiment,
    trim -> topic model} -> figures, strictly in that order.

    Every stage object is built in ``__init__`` so a bad configuration fails
    before any data is read.
    """

    def __init__(
        self,
        config: PipelineRunConfig | None = None,
        loader: DocumentLoader | None = None,
    ):
        self.cfg = config or PipelineRunConfig()
        self.loader = loader or TabularDocumentLoader()
        self.tokenizer = DefaultTokenizer(self.cfg.tokenization.to_config())
        self.cleaner = PatternTokenCleaner(self.cfg.cleaning.to_config())

        remover = DefaultStopwordRemover(self.cfg.features.stopword_config())
        self.dfm_builder = DfmBuilder(self.cfg.features.dfm_config(), remover)
        lexicon_cfg = DfmConfig(
            lowercase=self.cfg.features.lowercase,
            stem=False,
            language=self.cfg.features.language,
        )
        self.lexicon_builder = DfmBuilder(lexicon_cfg, remover)

        self.trimmer = DocfreqTrimmer(self.cfg.trim.to_config())
        self.modeler = modeler_for(self.cfg.topics.to_config())
        self.scorer = DictionaryScorer()

    # -- stages -----------------------------------------------------------

    def build_corpus(self) -> Corpus:
        with step("load", path=str(self.cfg.data_path)):
            frame = self.loader.load(self.cfg.data_path)
        with step("corpus", documents=len(frame)):
            corpus = add_country_names(Corpus.from_frame(frame))
            if self.cfg.continent_lookup_path is not None:
                lookup = load_continent_lookup(self.cfg.continent_lookup_path)
                corpus = add_continents(
                    corpus, lookup, name=self.cfg.sentiment.continent_column
                )
        return corpus

    def score_agenda(
        self, agenda_dfm: FeatureMatrix
    ) -> tuple[pd.DataFrame, pd.DataFrame]:
        with step("agenda", group_by=self.cfg.agenda_group_by):
            dictionary = load_dictionary(self.cfg.topic_dictionary_path)
            scores = self.scorer.score(
                agenda_dfm, dictionary, group_by=self.cfg.agenda_group_by
            )
            shares = category_shares(scores, on_zero=self.cfg.sentiment.on_zero)
        return scores, shares

    def score_sentiment(
        self, agenda_dfm: FeatureMatrix
    ) -> tuple[pd.DataFrame, Optional[pd.DataFrame]]:
        s = self.cfg.sentiment
        with step("sentiment"):
            lexicon = load_dictionary(self.cfg.sentiment_dictionary_path).select(
                s.positive, s.negative
            )
            by_country = sentiment_shares(
                self.scorer.score(agenda_dfm, lexicon, group_by=s.country_column),
                positive=s.positive,
                negative=s.negative,
                on_zero=s.on_zero,
            )
            by_continent = None
            if s.continent_column in agenda_dfm.docvars.columns:
                by_continent = sentiment_shares(
                    self.scorer.score(
                        agenda_dfm,
                        lexicon,
                        group_by=[s.continent_column, "year"],
                        with_docvars=True,
                    ),
                    positive=s.positive,
                    negative=s.negative,
                    on_zero=s.on_zero,
                )
        return by_country, by_continent

    def render_figures(self, artifacts: PipelineArtifacts) -> Dict[str, Path]:
        out_dir = self.cfg.output_dir / "figures"
        figures = {
            "wordcloud": lambda: charts.plot_wordcloud(artifacts.dfm),
            "frequency_lollipop": lambda: charts.plot_frequency_lollipop(artifacts.dfm),
            "agenda_shares": lambda: charts.plot_topic_shares(artifacts.agenda_shares),
            "sentiment_by_country": lambda: charts.plot_sentiment_by_country(
                artifacts.sentiment_scores
            ),
            "topic_terms": lambda: charts.plot_topic_terms(artifacts.topic_model),
        }
        if artifacts.continent_sentiment is not None:
            figures["sentiment_by_continent"] = lambda: (
                charts.plot_sentiment_by_continent(
                    artifacts.continent_sentiment,
                    continent=self.cfg.sentiment.continent_column,
                )
            )

        saved: Dict[str, Path] = {}
        with step("figures", count=len(figures)):
            for name, draw in figures.items():
                saved[name] = charts.save_figure(draw(), out_dir / f"{name}.png")
        return saved

    def write_tables(self, artifacts: PipelineArtifacts) -> Dict[str, Path]:
        out_dir = self.cfg.output_dir / "tables"
        out_dir.mkdir(parents=True, exist_ok=True)
        tables = {
            "agenda_scores": artifacts.agenda_scores,
            "agenda_shares": artifacts.agenda_shares,
            "sentiment_by_country": artifacts.sentiment_scores,
            "topic_labels": artifacts.topic_model.label_topics(
                self.cfg.topics.topn_words
            ),
            "topic_shares": artifacts.topic_model.topic_shares().to_frame(),
            "document_topics": artifacts.topic_model.document_topics(),
        }
        if artifacts.continent_sentiment is not None:
            tables["sentiment_by_continent"] = artifacts.continent_sentiment
        if artifacts.topic_model.effects is not None:
            tables["topic_effects"] = artifacts.topic_model.effects

        written: Dict[str, Path] = {}
        for name, frame in tables.items():
            path = out_dir / f"{name}.csv"
            frame.to_csv(path, index=name not in ("topic_effects",))
            written[name] = path
        logger.info(f"✅ Wrote {len(written)} tables to {out_dir}")
        return written

    # -- orchestration ----------------------------------------------------

    def run(self) -> PipelineArtifacts:
        corpus = self.build_corpus()

        with step("tokenize", documents=len(corpus)):
            tokens = tokenize_corpus(corpus, self.tokenizer)
        with step("clean_tokens"):
            cleaned_tokens = clean_tokens(tokens, self.cleaner)
        with step("dfm"):
            dfm = self.dfm_builder.build(cleaned_tokens)
            agenda_dfm = self.lexicon_builder.build(cleaned_tokens)

        agenda_scores, agenda_shares = self.score_agenda(agenda_dfm)
        sentiment_scores, continent_sentiment = self.score_sentiment(agenda_dfm)

        with step("trim"):
            trimmed_dfm = self.trimmer.trim(dfm)
        with step("topic_model", num_topics=self.cfg.topics.num_topics):
            topic_model = self.modeler.fit(trimmed_dfm)

        artifacts = PipelineArtifacts(
            corpus=corpus,
            tokens=tokens,
            cleaned_tokens=cleaned_tokens,
            dfm=dfm,
            agenda_dfm=agenda_dfm,
            agenda_scores=agenda_scores,
            agenda_shares=agenda_shares,
            sentiment_scores=sentiment_scores,
            continent_sentiment=continent_sentiment,
            trimmed_dfm=trimmed_dfm,
            topic_model=topic_model,
        )
        if self.cfg.figures:
            artifacts = replace(artifacts, figures=self.render_figures(artifacts))

        logger.info(
            msg.PIPELINE_COMPLETED.format(
                ndoc=trimmed_dfm.ndoc, nfeat=trimmed_dfm.nfeat, k=topic_model.num_topics
            )
        )
        return artifacts
