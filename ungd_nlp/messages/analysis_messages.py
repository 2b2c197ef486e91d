# ungd_nlp/messages/analysis_messages.py

INVALID_PATTERN = "Invalid removal pattern {pattern!r}: {error}"
UNKNOWN_VALUETYPE = "Unknown pattern valuetype '{valuetype}'."

TRIM_BOUNDS = "min_docfreq and max_docfreq must lie in [0, 1]; got {min} and {max}."
TRIM_ORDER = "min_docfreq ({min}) must not exceed max_docfreq ({max})."
TRIM_EMPTY = "Trimming to docfreq [{min}, {max}] removed every term."
EMPTY_MATRIX = "Feature matrix has no features."

DICTIONARY_NOT_FOUND = "Dictionary file not found: {path}"
DICTIONARY_MALFORMED = "Dictionary {path} is malformed: {error}"
DICTIONARY_EMPTY = "Dictionary '{name}' defines no categories."
DICTIONARY_UNKNOWN_KEYS = "Dictionary '{name}' has no such categories: {keys}."
SENTIMENT_CATEGORY_MISSING = "Score frame lacks sentiment column(s): {columns}"
SENTIMENT_ZERO_TOTAL = (
    "positive+negative is zero for {rows}; the sentiment ratio is undefined."
)
UNKNOWN_ZERO_POLICY = "on_zero must be 'raise', 'drop' or 'nan'; got '{policy}'."
