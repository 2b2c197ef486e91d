from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Callable, Dict

import pandas as pd

from ungd_nlp.core.loading.base import DocumentLoader
from ungd_nlp.core.loading.config import LoaderConfig
from ungd_nlp.messages import pipeline_messages as msg
from ungd_nlp.utils.exceptions import DataLoadError

logger = logging.getLogger(__name__)

_READERS: Dict[str, Callable[..., pd.DataFrame]] = {
    ".csv": pd.read_csv,
    ".tsv": lambda p, **kw: pd.read_csv(p, sep="\t", **kw),
    ".parquet": lambda p, **kw: pd.read_parquet(p),
    ".pkl": lambda p, **kw: pd.read_pickle(p),
    ".pickle": lambda p, **kw: pd.read_pickle(p),
}


class TabularDocumentLoader(DocumentLoader):
    """Adapter: reads csv/tsv/parquet/pickle speech tables with pandas."""

    def __init__(self, config: LoaderConfig | None = None):
        self.cfg = config or LoaderConfig()

    def _read(self, path: Path) -> pd.DataFrame:
        suffix = path.suffix.lower()
        reader = _READERS.get(suffix)
        if reader is None:
            raise DataLoadError(
                msg.DATA_FORMAT_UNSUPPORTED.format(suffix=suffix, path=path)
            )
        try:
            if suffix in (".csv", ".tsv"):
                return reader(path, encoding=self.cfg.encoding)
            return reader(path)
        except (ValueError, OSError, pd.errors.ParserError) as e:
            raise DataLoadError(msg.DATA_UNREADABLE.format(path=path, error=e)) from e

    def load(self, path: str | Path) -> pd.DataFrame:
        path = Path(path)
        if not path.exists():
            raise DataLoadError(msg.DATA_FILE_NOT_FOUND.format(path=path))

        df = self._read(path)
        logger.info(f"Loaded {len(df):,} rows from {path}")
        if df.empty:
            raise DataLoadError(msg.DATA_EMPTY.format(path=path))
        return validate_documents(df, self.cfg)


def validate_documents(df: pd.DataFrame, cfg: LoaderConfig) -> pd.DataFrame:
    """Check columns, types and id uniqueness; return a normalized copy."""
    missing = [c for c in cfg.required_columns if c not in df.columns]
    if missing:
        raise DataLoadError(msg.DATA_COLUMNS_MISSING.format(columns=", ".join(missing)))

    out = df.rename(
        columns={
            cfg.id_column: "doc_id",
            cfg.text_column: "text",
            cfg.country_column: "country",
            cfg.session_column: "session",
            cfg.year_column: "year",
        }
    ).reset_index(drop=True)
    out["doc_id"] = out["doc_id"].astype(str)

    dupes = out.loc[out["doc_id"].duplicated(), "doc_id"].unique().tolist()
    if dupes:
        raise DataLoadError(msg.DATA_DUPLICATE_IDS.format(ids=dupes[:10]))

    for col in ("session", "year"):
        as_num = pd.to_numeric(out[col], errors="coerce")
        bad = as_num.isna() | (as_num % 1 != 0)
        if bad.any():
            raise DataLoadError(
                msg.DATA_BAD_INTEGER.format(
                    column=col, ids=out.loc[bad, "doc_id"].tolist()[:10]
                )
            )
        out[col] = as_num.astype(int)

    blank = out["text"].isna()
    if blank.any():
        logger.warning(
            f"{int(blank.sum())} document(s) have no text and will be kept empty: "
            f"{out.loc[blank, 'doc_id'].tolist()[:10]}"
        )
    out["text"] = out["text"].fillna("").astype(str)
    out["country"] = out["country"].astype(str)
    return out


def load_directory(
    path: str | Path, config: LoaderConfig | None = None
) -> pd.DataFrame:
    """Read one speech per text file, parsing metadata from the file name."""
    cfg = config or LoaderConfig()
    root = Path(path)
    if not root.is_dir():
        raise DataLoadError(msg.DATA_FILE_NOT_FOUND.format(path=root))

    name_re = re.compile(cfg.filename_pattern)
    rows = []
    for f in sorted(root.glob(cfg.file_glob)):
        m = name_re.match(f.stem)
        if not m:
            raise DataLoadError(msg.SPEECH_FILENAME_INVALID.format(name=f.name))
        try:
            text = f.read_text(encoding=cfg.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise DataLoadError(msg.DATA_UNREADABLE.format(path=f, error=e)) from e
        rows.append(
            {
                cfg.id_column: f.stem,
                cfg.text_column: text,
                cfg.country_column: m.group("country"),
                cfg.session_column: m.group("session"),
                cfg.year_column: m.group("year"),
            }
        )

    if not rows:
        raise DataLoadError(
            msg.SPEECH_DIR_EMPTY.format(pattern=cfg.file_glob, path=root)
        )
    logger.info(f"Loaded {len(rows):,} speeches from {root}")
    return validate_documents(pd.DataFrame(rows), cfg)
