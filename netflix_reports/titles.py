from typing import Optional

from pyspark.sql import DataFrame
from pyspark.sql.types import IntegerType, StringType, StructField, StructType

from .config import Databases, ReportConfig, Tables
from .utils import parse_date_added, parse_leading_int, require_columns, split_tokens, standardize_columns

MOVIE = "Movie"
TV_SHOW = "TV Show"

TITLE_COLUMNS = [
    "showId",
    "type",
    "title",
    "director",
    "casts",
    "country",
    "dateAdded",
    "releaseYear",
    "rating",
    "duration",
    "listedIn",
    "description",
]

# Derived once in prepare_titles
DERIVED_COLUMNS = [
    "directors",
    "castMembers",
    "countries",
    "genres",
    "dateAddedParsed",
    "durationValue",
]

TITLES_SCHEMA = StructType(
    [StructField(c, IntegerType() if c == "releaseYear" else StringType(), True) for c in TITLE_COLUMNS]
)

# Raw Netflix exports name the cast column "cast"
_RENAME_MAP = {"cast": "casts"}


def load_titles(spark, dbs: Databases, tables: Tables) -> DataFrame:
    return spark.table(f"{dbs.titles}.{tables.titles}")


def is_prepared(df: DataFrame) -> bool:
    return all(c in df.columns for c in DERIVED_COLUMNS)


def prepare_titles(df: DataFrame, cfg: Optional[ReportConfig] = None) -> DataFrame:
    """
    Parse the multi-valued and free-form columns once so reports never
    re-split them:
      director  -> directors        (array<string>)
      casts     -> castMembers      (array<string>)
      country   -> countries        (array<string>)
      listedIn  -> genres           (array<string>)
      dateAdded -> dateAddedParsed  (date, null when unparseable)
      duration  -> durationValue    (int, null when no leading number)

    Raw columns are kept as loaded; a prepared frame is returned unchanged.
    """
    if is_prepared(df):
        return df
    cfg = cfg or ReportConfig()

    d = standardize_columns(df, _RENAME_MAP)
    require_columns(d, TITLE_COLUMNS)

    d = d.withColumn("releaseYear", d["releaseYear"].try_cast("int"))
    return (
        d.withColumn("directors", split_tokens("director"))
        .withColumn("castMembers", split_tokens("casts"))
        .withColumn("countries", split_tokens("country"))
        .withColumn("genres", split_tokens("listedIn"))
        .withColumn("dateAddedParsed", parse_date_added("dateAdded", cfg.date_formats))
        .withColumn("durationValue", parse_leading_int("duration"))
    )

