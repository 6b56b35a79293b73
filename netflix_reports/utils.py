import re
from typing import Dict, Iterable, List, Optional, Sequence

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F
from pyspark.sql.window import Window


class SchemaError(ValueError):
    """Raised when the titles frame does not carry the columns a report needs."""


_CAMEL_RX = re.compile(r"[^a-zA-Z0-9]+")
_LEADING_INT_RX = r"^\s*(\d+)"
_FORMAT_TOKEN_RX = re.compile(r"M+|d+|y+|[^Mdy]+")


def _lower_first(part: str) -> str:
    if part.isupper():
        return part.lower()
    return part[:1].lower() + part[1:]


def to_camel_case(name: str) -> str:
    """
    Convert column names to lowerCamelCase.
    Examples:
      "release_year" -> "releaseYear"
      "show_id"      -> "showId"
      "dateAdded"    -> "dateAdded"
    """
    if name is None:
        return name
    raw = name.strip()
    if raw == "":
        return raw
    parts = [p for p in _CAMEL_RX.split(raw) if p]
    if not parts:
        return raw

    first = _lower_first(parts[0])
    rest = [p[:1].upper() + p[1:].lower() for p in parts[1:]]
    return "".join([first] + rest)


def standardize_columns(df: DataFrame, rename_map: Optional[Dict[str, str]] = None) -> DataFrame:
    """
    1) Optionally rename known columns using rename_map (case-insensitive match)
    2) Convert all columns to camelCase
    """
    rename_map = rename_map or {}
    lower_map = {k.lower(): v for k, v in rename_map.items()}

    exprs = []
    for c in df.columns:
        target = lower_map.get(c.lower(), c)
        exprs.append(F.col(f"`{c}`").alias(to_camel_case(target)))
    return df.select(*exprs)


def require_columns(df: DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise SchemaError(f"Titles frame is missing required columns {missing}. Present: {df.columns}")


def is_blank(col: str) -> Column:
    return F.col(col).isNull() | (F.trim(F.col(col)) == "")


def split_tokens(col: str) -> Column:
    """
    Netflix multi-valued columns (director, cast, country, listed_in) are
    comma-joined strings. Split, trim, and drop empty tokens; a null or
    empty field becomes an empty array.
    """
    tokens = F.transform(F.split(F.col(col), ","), lambda t: F.trim(t))
    tokens = F.filter(tokens, lambda t: t != "")
    return F.when(is_blank(col), F.array().cast("array<string>")).otherwise(tokens)


def parse_leading_int(col: str) -> Column:
    """
    Leading integer of a free-form value: "90 min" -> 90, "3 Seasons" -> 3.
    Anything without a leading number, or one too large for an int, is null.
    """
    digits = F.regexp_extract(F.col(col), _LEADING_INT_RX, 1)
    return F.when(F.col(col).isNull() | (digits == ""), None).otherwise(digits.try_cast("int"))


def format_shape(fmt: str) -> str:
    r"""
    Regex a value must match before it is handed to the datetime parser.
      "MMMM d, yyyy" -> ^[A-Za-z]+\ \d{1,2},\ \d{4}$
    Only the pattern letters used for dateAdded (M, d, y) are understood;
    everything else is matched literally.
    """
    out = []
    for token in _FORMAT_TOKEN_RX.findall(fmt):
        letter, width = token[0], len(token)
        if letter == "M":
            out.append({1: r"\d{1,2}", 2: r"\d{2}", 3: "[A-Za-z]{3}"}.get(width, "[A-Za-z]+"))
        elif letter == "d":
            out.append(r"\d{1,2}" if width == 1 else r"\d{2}")
        elif letter == "y":
            out.append(r"\d{%d}" % width)
        else:
            out.append(re.escape(token))
    return "^" + "".join(out) + "$"


def parse_date_added(col: str, formats: Sequence[str]) -> Column:
    """
    Defensive parse of the locale-formatted dateAdded column.
    Each format is tried in order, only on values shaped like it; values
    no format accepts are null.
    """
    clean = F.trim(F.col(col))
    attempts = [
        F.when(clean.rlike(format_shape(fmt)), F.to_date(F.try_to_timestamp(clean, F.lit(fmt))))
        for fmt in formats
    ]
    parsed = attempts[0] if len(attempts) == 1 else F.coalesce(*attempts)
    return F.when(is_blank(col), None).otherwise(parsed)


def top_per_group(df: DataFrame, partition_cols: List[str], *order_exprs: Column) -> DataFrame:
    """Winning row of each group under order_exprs (ties must be broken by the caller)."""
    w = Window.partitionBy(*partition_cols).orderBy(*order_exprs)
    ranked = df.withColumn("_groupRank", F.row_number().over(w))
    return ranked.filter(F.col("_groupRank") == 1).drop("_groupRank")


def count_tokens(df: DataFrame, array_col: str, alias: str) -> DataFrame:
    """Explode a token array and count rows per token."""
    return (
        df.select(F.explode(F.col(array_col)).alias(alias))
        .groupBy(alias)
        .agg(F.count(F.lit(1)).alias("totalContent"))
    )
