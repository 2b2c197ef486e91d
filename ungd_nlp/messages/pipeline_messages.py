# ungd_nlp/messages/pipeline_messages.py

DATA_FILE_NOT_FOUND = "Input dataset not found: {path}"
DATA_FORMAT_UNSUPPORTED = "Unsupported dataset format '{suffix}' ({path})."
DATA_UNREADABLE = "Could not read dataset {path}: {error}"
DATA_COLUMNS_MISSING = "Dataset is missing required column(s): {columns}"
DATA_DUPLICATE_IDS = "Document identifiers must be unique; duplicated: {ids}"
DATA_BAD_INTEGER = "Column '{column}' must hold integers; offending rows: {ids}"
DATA_EMPTY = "Dataset {path} contains no documents."
SPEECH_DIR_EMPTY = "No speech files matching '{pattern}' under {path}."
SPEECH_FILENAME_INVALID = "Cannot parse country/session/year from file name '{name}'."

DOCVAR_EXISTS = "Docvar '{name}' already exists; docvars are append-only."
DOCVAR_LENGTH = "Docvar '{name}' has {got} values for {expected} documents."
DOCVAR_UNKNOWN_IDS = "Docvar '{name}' references unknown documents: {ids}"
DOCVAR_MISSING = "No docvar named '{name}'."

PIPELINE_COMPLETED = "Pipeline finished: {ndoc} documents, {nfeat} features, K={k}."

PREVALENCE_FALLBACK = (
    "No continent lookup table configured; "
    "topic prevalence is estimated on '{formula}'."
)
PREVALENCE_UNKNOWN_DOCVAR = (
    "Prevalence formula '{formula}' uses {names}, "
    "which no configured docvar provides."
)
