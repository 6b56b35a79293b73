import logging
from datetime import date
from functools import reduce
from typing import Optional, Sequence

from pyspark.sql import DataFrame
from pyspark.sql import functions as F
from pyspark.sql.window import Window

from .config import ReportConfig
from .titles import MOVIE, TITLE_COLUMNS, TV_SHOW, prepare_titles
from .utils import count_tokens, is_blank, top_per_group

logger = logging.getLogger(__name__)

_DEFAULTS = ReportConfig()


def _check_count(name: str, value: int) -> int:
    if value is None or int(value) < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return int(value)


def _check_text(name: str, value: str) -> str:
    if value is None or str(value).strip() == "":
        raise ValueError(f"{name} must be a non-empty string")
    return str(value)


def _rows(df: DataFrame) -> DataFrame:
    return df.select(*TITLE_COLUMNS)


def _warn_unparsed(df: DataFrame, raw_col: str, parsed_col: str, report: str) -> None:
    if not logger.isEnabledFor(logging.WARNING):
        return
    n = df.filter(~is_blank(raw_col) & F.col(parsed_col).isNull()).count()
    if n:
        logger.warning("%s: excluded %d rows with unparseable %s", report, n, raw_col)


def type_distribution(titles: DataFrame) -> DataFrame:
    return (
        prepare_titles(titles).groupBy("type")
        .agg(F.count(F.lit(1)).alias("totalContent"))
        .orderBy("type")
    )


def most_frequent_rating(titles: DataFrame) -> DataFrame:
    """
    Most common rating per type. Null/blank ratings are not counted;
    ties go to the alphabetically first rating.
    """
    counts = (
        prepare_titles(titles).filter(~is_blank("rating"))
        .groupBy("type", "rating")
        .agg(F.count(F.lit(1)).alias("ratingCount"))
    )
    return (
        top_per_group(counts, ["type"], F.col("ratingCount").desc(), F.col("rating").asc())
        .orderBy("type")
    )


def genre_distribution(titles: DataFrame) -> DataFrame:
    t = prepare_titles(titles)
    return count_tokens(t, "genres", "genre").orderBy(F.col("totalContent").desc(), F.col("genre").asc())


def titles_per_release_year(titles: DataFrame) -> DataFrame:
    return (
        prepare_titles(titles).groupBy("releaseYear")
        .agg(F.count(F.lit(1)).alias("totalContent"))
        .orderBy("releaseYear")
    )


def movies_by_release_year(titles: DataFrame, year: int) -> DataFrame:
    return _rows(prepare_titles(titles).filter((F.col("type") == MOVIE) & (F.col("releaseYear") == int(year))))


def recently_added(
    titles: DataFrame,
    cutoff: Optional[date] = None,
    years: int = _DEFAULTS.recent_years,
    as_of: Optional[date] = None,
) -> DataFrame:
    """
    Titles added on or after cutoff. Without an explicit cutoff the window
    is `years` back from as_of (today by default).
    """
    t = prepare_titles(titles)
    if cutoff is None:
        years = _check_count("years", years)
        as_of = as_of or date.today()
        cutoff_col = F.add_months(F.lit(as_of), -12 * years)
    else:
        cutoff_col = F.lit(cutoff)

    _warn_unparsed(t, "dateAdded", "dateAddedParsed", "recently_added")
    return _rows(t.filter(F.col("dateAddedParsed") >= cutoff_col))


def documentaries(titles: DataFrame, genre: str = _DEFAULTS.documentary_genre) -> DataFrame:
    return _rows(prepare_titles(titles).filter(F.col("listedIn").contains(genre)))


def without_director(titles: DataFrame) -> DataFrame:
    return _rows(prepare_titles(titles).filter(is_blank("director")))


def by_director(titles: DataFrame, name: str) -> DataFrame:
    name = _check_text("name", name)
    t = prepare_titles(titles)
    return _rows(t.filter(F.array_contains(F.col("directors"), name)))


def longest_movie(titles: DataFrame) -> DataFrame:
    """
    The single movie with the largest duration. Equal durations resolve to
    the lowest showId. Empty when no movie has a parseable duration.
    """
    t = prepare_titles(titles)
    movies = t.filter(F.col("type") == MOVIE)
    _warn_unparsed(movies, "duration", "durationValue", "longest_movie")
    return (
        movies.filter(F.col("durationValue").isNotNull())
        .orderBy(F.col("durationValue").desc(), F.col("showId").asc())
        .select(*TITLE_COLUMNS, "durationValue")
        .limit(1)
    )


def tv_shows_with_more_seasons(titles: DataFrame, k: int = _DEFAULTS.min_seasons) -> DataFrame:
    k = _check_count("k", k)
    t = prepare_titles(titles)
    shows = t.filter(F.col("type") == TV_SHOW)
    _warn_unparsed(shows, "duration", "durationValue", "tv_shows_with_more_seasons")
    return _rows(shows.filter(F.col("durationValue") > k))


def top_countries(titles: DataFrame, n: int = _DEFAULTS.top_n_countries) -> DataFrame:
    n = _check_count("n", n)
    t = prepare_titles(titles)
    return (
        count_tokens(t, "countries", "country")
        .orderBy(F.col("totalContent").desc(), F.col("country").asc())
        .limit(n)
    )


def country_share_by_year(
    titles: DataFrame,
    country: str = _DEFAULTS.india_country,
    scale: int = _DEFAULTS.percent_scale,
) -> DataFrame:
    """
    Per release year, the count of titles whose country mentions `country`
    and that count as a percentage of all such titles (rounded half-up to
    `scale` places). No matching titles gives an empty frame.
    """
    country = _check_text("country", country)
    per_year = (
        prepare_titles(titles).filter(F.col("country").contains(country))
        .groupBy("releaseYear")
        .agg(F.count(F.lit(1)).alias("totalContent"))
    )
    total = F.sum("totalContent").over(Window.partitionBy())
    return (
        per_year.withColumn("pctOfCountryContent", F.round(F.col("totalContent") * 100.0 / total, scale))
        .orderBy(F.col("pctOfCountryContent").desc(), F.col("releaseYear").desc())
    )


def top_india_years(
    titles: DataFrame,
    n: int = _DEFAULTS.top_n_india_years,
    country: str = _DEFAULTS.india_country,
    scale: int = _DEFAULTS.percent_scale,
) -> DataFrame:
    n = _check_count("n", n)
    return country_share_by_year(titles, country=country, scale=scale).limit(n)


def categorize_by_keywords(titles: DataFrame, keywords: Sequence[str] = _DEFAULTS.bad_keywords) -> DataFrame:
    """Adds `category`: "Bad" when the description mentions any keyword, else "Good"."""
    if not keywords:
        raise ValueError("keywords must not be empty")
    mentions = reduce(lambda a, b: a | b, [F.col("description").contains(k) for k in keywords])
    return prepare_titles(titles).withColumn("category", F.when(mentions, F.lit("Bad")).otherwise(F.lit("Good")))


def keyword_categories(titles: DataFrame, keywords: Sequence[str] = _DEFAULTS.bad_keywords) -> DataFrame:
    return (
        categorize_by_keywords(titles, keywords)
        .groupBy("category")
        .agg(F.count(F.lit(1)).alias("totalContent"))
        .orderBy("category")
    )


def actor_movie_count(
    titles: DataFrame,
    actor: str,
    years: int = _DEFAULTS.actor_years,
    as_of_year: Optional[int] = None,
) -> int:
    """Number of movies released in the last `years` years whose cast mentions `actor`."""
    actor = _check_text("actor", actor)
    years = _check_count("years", years)
    as_of_year = int(as_of_year) if as_of_year is not None else date.today().year
    return (
        prepare_titles(titles).filter(
            (F.col("type") == MOVIE)
            & F.col("casts").contains(actor)
            & (F.col("releaseYear") >= as_of_year - years)
        )
        .count()
    )


def top_actors_in_country(titles: DataFrame, country: str, n: int = _DEFAULTS.top_n_actors) -> DataFrame:
    country = _check_text("country", country)
    n = _check_count("n", n)
    t = prepare_titles(titles)
    movies = t.filter((F.col("type") == MOVIE) & F.col("country").contains(country))
    return (
        count_tokens(movies, "castMembers", "actor")
        .orderBy(F.col("totalContent").desc(), F.col("actor").asc())
        .limit(n)
    )


def top_directors(titles: DataFrame, n: int = _DEFAULTS.top_n_directors) -> DataFrame:
    n = _check_count("n", n)
    t = prepare_titles(titles)
    return (
        count_tokens(t, "directors", "director")
        .orderBy(F.col("totalContent").desc(), F.col("director").asc())
        .limit(n)
    )
