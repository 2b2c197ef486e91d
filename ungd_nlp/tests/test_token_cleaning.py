import re

import pandas as pd
import pytest

from ungd_nlp.core.token_cleaning.cleaner import PatternTokenCleaner, clean_tokens
from ungd_nlp.core.token_cleaning.config import OCR_NOISE_PATTERNS, PatternCleanConfig
from ungd_nlp.core.tokenization.tokens import Tokens
from ungd_nlp.utils.exceptions import InvalidConfigurationError


def test_default_patterns_remove_ocr_noise():
    kept, removed = PatternTokenCleaner().clean(
        ["Peace", "1945", "--", "of", "a", "—", "12-3", "security"]
    )
    assert kept == ["Peace", "security"]
    assert removed == ["1945", "--", "of", "a", "—", "12-3"]


def test_no_kept_token_matches_a_pattern():
    tokens = ["Peace", "x", "19-45", "...", "nations", "__", "ok", "world"]
    kept, _ = PatternTokenCleaner().clean(tokens)
    for tok in kept:
        assert not any(re.search(p, tok) for p in OCR_NOISE_PATTERNS)


def test_fixed_and_glob_patterns():
    fixed = PatternTokenCleaner(
        PatternCleanConfig(patterns=("Applause",), valuetype="fixed")
    )
    assert fixed.clean(["applause", "Applause", "applauded"])[0] == ["applauded"]

    glob = PatternTokenCleaner(
        PatternCleanConfig(patterns=("appl*",), valuetype="glob")
    )
    assert glob.clean(["applause", "apple", "happy"])[0] == ["happy"]


# -------------------------------------
# ❌ Bad patterns fail up front
# -------------------------------------
def test_invalid_regex():
    with pytest.raises(InvalidConfigurationError) as exc:
        PatternTokenCleaner(PatternCleanConfig(patterns=("[unclosed",)))
    assert "[unclosed" in str(exc.value)


def test_unknown_valuetype():
    with pytest.raises(InvalidConfigurationError):
        PatternTokenCleaner(PatternCleanConfig(patterns=("x",), valuetype="exact"))


def test_clean_tokens_reports_emptied_documents(caplog):
    docvars = pd.DataFrame(
        {"country": ["FRA", "USA"]}, index=pd.Index(["a", "b"], name="doc_id")
    )
    tokens = Tokens.from_iterable(["a", "b"], [["peace", "42"], ["--", "of"]], docvars)

    cleaned = clean_tokens(tokens)

    assert cleaned["a"] == ("peace",)
    assert cleaned["b"] == ()
    assert tokens["b"] == ("--", "of")
    assert "reduced to zero tokens" in caplog.text
