from dataclasses import dataclass


@dataclass(frozen=True)
class Databases:
    # Source table is populated by the external loader
    titles: str = "netflix"
    reports: str = "netflix_reports"


@dataclass(frozen=True)
class Tables:
    titles: str = "netflixTitles"


@dataclass(frozen=True)
class ReportConfig:
    # Top-N limits
    top_n_countries: int = 5
    top_n_india_years: int = 5
    top_n_actors: int = 10
    top_n_directors: int = 25

    # Filters
    india_country: str = "India"
    documentary_genre: str = "Documentaries"
    bad_keywords: tuple = ("kill", "violence")

    # Windows (years back from "today")
    recent_years: int = 5
    actor_years: int = 10

    # TV shows with more than this many seasons
    min_seasons: int = 5

    # Decimal places for percentage columns
    percent_scale: int = 2

    # Netflix exports use "September 25, 2021"; older dumps vary
    date_formats: tuple = ("MMMM d, yyyy", "d-MMM-yy", "yyyy-MM-dd")
