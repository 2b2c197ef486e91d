from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderConfig:
    id_column: str = "doc_id"
    text_column: str = "text"
    country_column: str = "country"
    session_column: str = "session"
    year_column: str = "year"
    encoding: str = "utf-8"
    # <COUNTRY>_<SESSION>_<YEAR>.txt, as the UN General Debate corpus ships
    filename_pattern: str = (
        r"^(?P<country>[A-Z]{2,3})_(?P<session>\d+)_(?P<year>\d{4})$"
    )
    file_glob: str = "**/*.txt"

    @property
    def required_columns(self) -> tuple[str, ...]:
        return (
            self.id_column,
            self.text_column,
            self.country_column,
            self.session_column,
            self.year_column,
        )
