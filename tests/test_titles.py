import pytest

from netflix_reports.titles import DERIVED_COLUMNS, TITLE_COLUMNS, is_prepared, prepare_titles
from netflix_reports.utils import SchemaError


def test_prepare_titles_parses_multi_valued_fields(titles):
    prepared = prepare_titles(titles)
    assert is_prepared(prepared)
    assert prepared.columns == TITLE_COLUMNS + DERIVED_COLUMNS

    row = prepared.filter("showId = 's1'").first()
    assert row["countries"] == ["India", "France"]
    assert row["directors"] == ["Jane Doe", "John Roe"]
    assert row["castMembers"] == ["Salman Khan", "Ann Lee"]
    assert row["genres"] == ["Dramas", "Comedies"]
    assert row["durationValue"] == 90


def test_prepare_titles_empty_fields_give_no_tokens(titles):
    row = prepare_titles(titles).filter("showId = 's5'").first()
    assert row["directors"] == []
    assert row["castMembers"] == []
    assert row["countries"] == []
    assert row["durationValue"] == 2


def test_prepare_titles_is_a_noop_on_prepared_frames(titles):
    prepared = prepare_titles(titles)
    assert prepare_titles(prepared) is prepared


def test_prepare_titles_accepts_raw_export_columns(spark):
    raw = spark.createDataFrame(
        [("s1", "Movie", "Alpha", "Jane Doe", "Ann Lee", "India", "September 25, 2021",
          "2020", "TV-MA", "90 min", "Dramas", "Quiet")],
        ["show_id", "type", "title", "director", "cast", "country", "date_added",
         "release_year", "rating", "duration", "listed_in", "description"],
    )
    row = prepare_titles(raw).first()
    assert row["showId"] == "s1"
    assert row["casts"] == "Ann Lee"
    assert row["releaseYear"] == 2020
    assert row["genres"] == ["Dramas"]


def test_prepare_titles_rejects_missing_columns(spark):
    df = spark.createDataFrame([("s1", "Movie")], ["show_id", "type"])
    with pytest.raises(SchemaError, match="title"):
        prepare_titles(df)
