from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Literal


@dataclass(frozen=True)
class StopwordConfig:
    language: str = "english"
    source: Literal["nltk", "sklearn", "none"] = "nltk"  # standard list to start from
    # extra words to remove
    custom_stopwords: FrozenSet[str] = field(default_factory=frozenset)
    exclude_stopwords: FrozenSet[str] = field(
        default_factory=frozenset
    )  # words to keep even if in list
    lowercase: bool = True
    preserve_negations: bool = False  # keep {no, not, never}


# Boilerplate of the General Debate: forms of address, procedural and
# institutional words that appear in nearly every speech.
UNGD_STOPWORDS: FrozenSet[str] = frozenset(
    {
        "united", "nations", "nation", "international", "general", "assembly",
        "session", "president", "mr", "madam", "secretary", "secretary-general",
        "delegation", "delegations", "country", "countries", "also", "must",
        "will", "can", "may", "shall", "year", "years", "world", "today",
        "like", "wish", "would", "us", "one", "new", "people", "peoples",
        "government", "state", "states", "excellency", "distinguished",
        "ladies", "gentlemen", "thank", "organization", "member",
    }
)
