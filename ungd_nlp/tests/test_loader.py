import pandas as pd
import pytest

from ungd_nlp.core.loading.config import LoaderConfig
from ungd_nlp.core.loading.loader import TabularDocumentLoader, load_directory
from ungd_nlp.utils.exceptions import DataLoadError


def test_load_csv(tmp_path, speeches_frame):
    path = tmp_path / "speeches.csv"
    speeches_frame.to_csv(path, index=False)

    df = TabularDocumentLoader().load(path)

    assert list(df["doc_id"]) == list(speeches_frame["doc_id"])
    assert df["session"].dtype.kind == "i"
    assert df["year"].tolist() == speeches_frame["year"].tolist()


def test_load_pickle_with_renamed_columns(tmp_path):
    frame = pd.DataFrame(
        {
            "id": ["a", "b"],
            "speech": ["one", "two"],
            "iso": ["FRA", "USA"],
            "s": [1, 2],
            "y": [1946, 1947],
        }
    )
    path = tmp_path / "speeches.pkl"
    frame.to_pickle(path)
    cfg = LoaderConfig(
        id_column="id",
        text_column="speech",
        country_column="iso",
        session_column="s",
        year_column="y",
    )

    df = TabularDocumentLoader(cfg).load(path)

    assert list(df.columns[:5]) == ["doc_id", "text", "country", "session", "year"]


# -------------------------------------
# ❌ Missing file / bad format / bad content
# -------------------------------------
def test_missing_file(tmp_path):
    with pytest.raises(DataLoadError):
        TabularDocumentLoader().load(tmp_path / "nope.csv")


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "speeches.xlsx"
    path.write_text("x")
    with pytest.raises(DataLoadError) as exc:
        TabularDocumentLoader().load(path)
    assert exc.value.code == "DATA_LOAD_ERROR"


def test_missing_columns(tmp_path):
    path = tmp_path / "speeches.csv"
    pd.DataFrame({"doc_id": ["a"], "text": ["x"]}).to_csv(path, index=False)
    with pytest.raises(DataLoadError) as exc:
        TabularDocumentLoader().load(path)
    assert "country" in str(exc.value)


def test_duplicate_ids(tmp_path, speeches_frame):
    frame = pd.concat([speeches_frame, speeches_frame.head(1)])
    path = tmp_path / "speeches.csv"
    frame.to_csv(path, index=False)
    with pytest.raises(DataLoadError):
        TabularDocumentLoader().load(path)


def test_non_integer_year(tmp_path, speeches_frame):
    frame = speeches_frame.astype({"year": object})
    frame.loc[0, "year"] = "nineteen"
    path = tmp_path / "speeches.csv"
    frame.to_csv(path, index=False)
    with pytest.raises(DataLoadError):
        TabularDocumentLoader().load(path)


def test_missing_text_is_kept_empty(tmp_path, speeches_frame, caplog):
    frame = speeches_frame.copy()
    frame.loc[1, "text"] = None
    path = tmp_path / "speeches.csv"
    frame.to_csv(path, index=False)

    df = TabularDocumentLoader().load(path)

    assert df.loc[1, "text"] == ""
    assert "no text" in caplog.text


def test_load_directory(tmp_path):
    (tmp_path / "FRA_44_1989.txt").write_text("Liberty for all.", encoding="utf-8")
    (tmp_path / "USA_44_1989.txt").write_text("Freedom and peace.", encoding="utf-8")

    df = load_directory(tmp_path)

    assert df["doc_id"].tolist() == ["FRA_44_1989", "USA_44_1989"]
    assert df["session"].tolist() == [44, 44]
    assert df["year"].tolist() == [1989, 1989]


def test_load_directory_bad_name(tmp_path):
    (tmp_path / "france.txt").write_text("x", encoding="utf-8")
    with pytest.raises(DataLoadError):
        load_directory(tmp_path)
