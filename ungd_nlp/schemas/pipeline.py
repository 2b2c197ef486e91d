from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from ungd_nlp.core.config import settings
from ungd_nlp.core.dfm.config import DfmConfig
from ungd_nlp.core.stopword_removal.config import UNGD_STOPWORDS, StopwordConfig
from ungd_nlp.core.token_cleaning.config import OCR_NOISE_PATTERNS, PatternCleanConfig
from ungd_nlp.core.tokenization.config import TokenizationConfig
from ungd_nlp.core.topic_modeling.config import TopicModelConfig
from ungd_nlp.core.trimming.config import TrimConfig
from ungd_nlp.messages import pipeline_messages as msg
from ungd_nlp.utils.exceptions import DataLoadError, InvalidConfigurationError

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TokenizationSettings(BaseModel):
    remove_numbers: bool = True
    remove_punct: bool = True
    remove_symbols: bool = True
    remove_url: bool = True
    split_hyphens: bool = True

    def to_config(self) -> TokenizationConfig:
        return TokenizationConfig(**self.model_dump())


class CleaningSettings(BaseModel):
    patterns: List[str] = Field(default_factory=lambda: list(OCR_NOISE_PATTERNS))
    valuetype: Literal["regex", "fixed", "glob"] = "regex"

    def to_config(self) -> PatternCleanConfig:
        return PatternCleanConfig(
            patterns=tuple(self.patterns), valuetype=self.valuetype
        )


class FeatureSettings(BaseModel):
    lowercase: bool = True
    stem: bool = True
    language: str = "english"
    stopword_source: Literal["nltk", "sklearn", "none"] = "nltk"
    extra_stopwords: List[str] = Field(default_factory=lambda: sorted(UNGD_STOPWORDS))

    def dfm_config(self) -> DfmConfig:
        return DfmConfig(
            lowercase=self.lowercase, stem=self.stem, language=self.language
        )

    def stopword_config(self) -> StopwordConfig:
        return StopwordConfig(
            language=self.language,
            source=self.stopword_source,
            custom_stopwords=frozenset(self.extra_stopwords),
        )


class TrimSettings(BaseModel):
    min_docfreq: float = Field(default_factory=lambda: settings.MIN_DOCFREQ)
    max_docfreq: float = Field(default_factory=lambda: settings.MAX_DOCFREQ)
    min_termfreq: Optional[int] = None

    def to_config(self) -> TrimConfig:
        return TrimConfig(**self.model_dump())


class TopicSettings(BaseModel):
    num_topics: int = Field(default_factory=lambda: settings.NUM_TOPICS)
    backend: Literal["nmf", "lda", "gensim"] = Field(
        default_factory=lambda: settings.TOPIC_BACKEND
    )
    init: Literal["spectral", "random"] = "spectral"
    random_state: int = Field(default_factory=lambda: settings.RANDOM_SEED)
    max_iter: int = Field(default_factory=lambda: settings.MAX_EM_ITERATIONS)
    tol: Optional[float] = None
    topn_words: int = 7
    # None: "year + C(<continent column>)", or "year" without a continent lookup
    prevalence: Optional[str] = None

    def to_config(self) -> TopicModelConfig:
        return TopicModelConfig(**self.model_dump())


class SentimentSettings(BaseModel):
    positive: str = "positive"
    negative: str = "negative"
    on_zero: Literal["raise", "drop", "nan"] = "drop"
    country_column: str = "country"
    continent_column: str = "continent"


class PipelineRunConfig(BaseModel):
    data_path: Path = Field(default_factory=lambda: settings.DATA_PATH)
    topic_dictionary_path: Path = Field(
        default_factory=lambda: settings.TOPIC_DICTIONARY_PATH
    )
    sentiment_dictionary_path: Path = Field(
        default_factory=lambda: settings.SENTIMENT_DICTIONARY_PATH
    )
    continent_lookup_path: Optional[Path] = Field(
        default_factory=lambda: settings.CONTINENT_LOOKUP_PATH
    )
    output_dir: Path = Field(default_factory=lambda: settings.OUTPUT_DIR)

    agenda_group_by: str = "country"
    tokenization: TokenizationSettings = Field(default_factory=TokenizationSettings)
    cleaning: CleaningSettings = Field(default_factory=CleaningSettings)
    features: FeatureSettings = Field(default_factory=FeatureSettings)
    trim: TrimSettings = Field(default_factory=TrimSettings)
    topics: TopicSettings = Field(default_factory=TopicSettings)
    sentiment: SentimentSettings = Field(default_factory=SentimentSettings)
    figures: bool = True

    @model_validator(mode="after")
    def _resolve_prevalence(self) -> "PipelineRunConfig":
        column = self.sentiment.continent_column
        has_continents = self.continent_lookup_path is not None

        if "prevalence" not in self.topics.model_fields_set:
            if has_continents:
                self.topics.prevalence = f"year + C({column})"
            else:
                self.topics.prevalence = "year"
                logger.warning(msg.PREVALENCE_FALLBACK.format(formula="year"))
            return self

        # continent columns only exist when a lookup table adds them
        names = set(_IDENTIFIER.findall(self.topics.prevalence or ""))
        unknown = sorted(
            n
            for n in names & {"continent", column}
            if not (has_continents and n == column)
        )
        if unknown:
            raise InvalidConfigurationError(
                msg.PREVALENCE_UNKNOWN_DOCVAR.format(
                    formula=self.topics.prevalence, names=unknown
                )
            )
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PipelineRunConfig":
        path = Path(path)
        if not path.exists():
            raise DataLoadError(f"Run configuration not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise DataLoadError(
                f"Run configuration {path} is not valid YAML: {e}"
            ) from e
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid run configuration {path}: {e}"
            ) from e
