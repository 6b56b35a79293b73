import logging
from datetime import date
from typing import Any, Callable, Dict, Optional, Union

from pyspark.sql import DataFrame

from . import queries as q
from .config import Databases, ReportConfig, Tables
from .titles import load_titles, prepare_titles

logger = logging.getLogger(__name__)

ReportResult = Union[DataFrame, int]


def _registry(cfg: ReportConfig, as_of: date, params: Dict[str, Any]) -> Dict[str, Optional[Callable[[DataFrame], ReportResult]]]:
    """
    Report name -> callable over the prepared titles frame.
    A None entry means the report needs a parameter that was not given.
    """
    director = params.get("director")
    actor = params.get("actor")
    country = params.get("country")
    release_year = params.get("release_year")

    return {
        "type_distribution": q.type_distribution,
        "most_frequent_rating": q.most_frequent_rating,
        "genre_distribution": q.genre_distribution,
        "movies_by_release_year": (
            (lambda t: q.movies_by_release_year(t, release_year)) if release_year is not None else None
        ),
        "recently_added": lambda t: q.recently_added(t, years=cfg.recent_years, as_of=as_of),
        "top_india_years": lambda t: q.top_india_years(
            t, n=cfg.top_n_india_years, country=cfg.india_country, scale=cfg.percent_scale
        ),
        "top_countries": lambda t: q.top_countries(t, n=cfg.top_n_countries),
        "longest_movie": q.longest_movie,
        "tv_shows_with_more_seasons": lambda t: q.tv_shows_with_more_seasons(t, k=cfg.min_seasons),
        "documentaries": lambda t: q.documentaries(t, genre=cfg.documentary_genre),
        "without_director": q.without_director,
        "keyword_categories": lambda t: q.keyword_categories(t, keywords=cfg.bad_keywords),
        "by_director": (lambda t: q.by_director(t, director)) if director else None,
        "actor_movie_count": (
            (lambda t: q.actor_movie_count(t, actor, years=cfg.actor_years, as_of_year=as_of.year)) if actor else None
        ),
        "top_actors_in_country": (
            (lambda t: q.top_actors_in_country(t, country, n=cfg.top_n_actors)) if country else None
        ),
        "titles_per_release_year": q.titles_per_release_year,
        "top_directors": lambda t: q.top_directors(t, n=cfg.top_n_directors),
    }


def run_reports(
    titles: DataFrame,
    cfg: Optional[ReportConfig] = None,
    as_of: Optional[date] = None,
    director: Optional[str] = None,
    actor: Optional[str] = None,
    country: Optional[str] = None,
    release_year: Optional[int] = None,
) -> Dict[str, ReportResult]:
    """
    Run every report against one prepared, cached titles frame.

    Parameterised reports (by_director, actor_movie_count,
    top_actors_in_country, movies_by_release_year) run only when their
    parameter is supplied.
    """
    cfg = cfg or ReportConfig()
    as_of = as_of or date.today()
    params = {"director": director, "actor": actor, "country": country, "release_year": release_year}

    prepared = prepare_titles(titles, cfg).cache()
    results: Dict[str, ReportResult] = {}
    for name, report in _registry(cfg, as_of, params).items():
        if report is None:
            logger.info("Skipping %s: required parameter not supplied", name)
            continue
        logger.info("Running report %s", name)
        results[name] = report(prepared)

    logger.info("Built %d reports (as_of=%s)", len(results), as_of)
    return results


def load_and_run(spark, dbs: Databases, tables: Tables, cfg: ReportConfig, **params) -> Dict[str, ReportResult]:
    titles = load_titles(spark, dbs, tables)
    return run_reports(titles, cfg, **params)
