import pytest
from pyspark.sql import SparkSession

from netflix_reports.titles import TITLE_COLUMNS, TITLES_SCHEMA


@pytest.fixture(scope="session")
def spark():
    session = (
        SparkSession.builder
        .master("local[1]")
        .appName("netflix-reports-tests")
        .config("spark.sql.shuffle.partitions", "1")
        .config("spark.sql.session.timeZone", "UTC")
        .config("spark.ui.enabled", "false")
        .getOrCreate()
    )
    yield session
    session.stop()


_BLANK_TITLE = {
    "showId": None,
    "type": "Movie",
    "title": "Untitled",
    "director": None,
    "casts": None,
    "country": None,
    "dateAdded": None,
    "releaseYear": 2020,
    "rating": None,
    "duration": None,
    "listedIn": None,
    "description": None,
}


@pytest.fixture
def make_titles(spark):
    def _make(rows):
        records = [tuple({**_BLANK_TITLE, **r}[c] for c in TITLE_COLUMNS) for r in rows]
        return spark.createDataFrame(records, TITLES_SCHEMA)

    return _make


@pytest.fixture
def titles(make_titles):
    """3 movies, 2 TV shows."""
    return make_titles([
        {
            "showId": "s1", "type": "Movie", "title": "Alpha",
            "director": "Jane Doe, John Roe", "casts": "Salman Khan, Ann Lee",
            "country": "India, France ", "dateAdded": "September 25, 2021", "releaseYear": 2020,
            "rating": "TV-MA", "duration": "90 min", "listedIn": "Dramas, Comedies",
            "description": "A killer on the run",
        },
        {
            "showId": "s2", "type": "Movie", "title": "Beta",
            "director": None, "casts": "Ann Lee",
            "country": "United States", "dateAdded": " January 5, 2019", "releaseYear": 2019,
            "rating": "PG-13", "duration": "120 min", "listedIn": "Documentaries",
            "description": "A heartwarming family story",
        },
        {
            "showId": "s3", "type": "Movie", "title": "Gamma",
            "director": "", "casts": None,
            "country": None, "dateAdded": None, "releaseYear": 2020,
            "rating": "TV-MA", "duration": "45 min", "listedIn": "Dramas",
            "description": "Tales of violence",
        },
        {
            "showId": "s4", "type": "TV Show", "title": "Delta",
            "director": "Jane Doe", "casts": "Salman Khan",
            "country": "India", "dateAdded": "not a date", "releaseYear": 2021,
            "rating": "TV-14", "duration": "6 Seasons", "listedIn": "International TV Shows, Docuseries",
            "description": "A quiet town",
        },
        {
            "showId": "s5", "type": "TV Show", "title": "Epsilon",
            "director": None, "casts": "",
            "country": "", "dateAdded": "2022-03-01", "releaseYear": 2018,
            "rating": "TV-MA", "duration": "2 Seasons", "listedIn": "Comedies",
            "description": None,
        },
    ])


@pytest.fixture
def strict_spark(spark):
    """Session on Spark 3.x datetime defaults: legacy-parsable values raise instead of returning null."""
    session = spark.newSession()
    session.conf.set("spark.sql.legacy.timeParserPolicy", "EXCEPTION")
    return session
