import argparse
import logging
import sys

import matplotlib

from ungd_nlp.schemas.pipeline import PipelineRunConfig
from ungd_nlp.utils.exceptions import PipelineError
from ungd_nlp.utils.logging import setup_logging

logger = logging.getLogger("ungd_nlp.run_pipeline")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Agenda, sentiment and topic analysis of UN General Debate speeches"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="YAML run file overriding the defaults"
    )
    parser.add_argument(
        "--no-figures", action="store_true", help="Skip rendering charts"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Root log level (case-insensitive)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    matplotlib.use("Agg")

    # imported after the backend switch so pyplot never binds to a GUI backend
    from ungd_nlp.services.speech_pipeline import SpeechAnalysisPipeline

    try:
        if args.config:
            config = PipelineRunConfig.from_yaml(args.config)
        else:
            config = PipelineRunConfig()
        if args.no_figures:
            config = config.model_copy(update={"figures": False})
        pipeline = SpeechAnalysisPipeline(config)
        artifacts = pipeline.run()
        pipeline.write_tables(artifacts)
    except PipelineError as e:
        logger.error(f"Pipeline aborted: {e}")
        return 1

    print(artifacts.topic_model.label_topics(config.topics.topn_words).to_string())
    return 0


if __name__ == "__main__":
    sys.exit(main())
