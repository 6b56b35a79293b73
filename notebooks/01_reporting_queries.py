# Databricks notebook source
# MAGIC %md
# MAGIC # 01 - Netflix Reporting Queries
# MAGIC Business questions over the titles table:
# MAGIC - content-type mix and most common rating per type
# MAGIC - genre and country volumes, Indian content by release year
# MAGIC - longest movie, long-running TV shows, documentaries, titles without a director
# MAGIC - keyword categorization of descriptions
# MAGIC - director / actor lookups

import logging

from netflix_reports.config import Databases, Tables, ReportConfig
from netflix_reports.reports import load_and_run

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

dbs = Databases()
tables = Tables()
cfg = ReportConfig()  # e.g. ReportConfig(top_n_countries=10)

results = load_and_run(
    spark,
    dbs,
    tables,
    cfg,
    director="Rajiv Chilaka",
    actor="Salman Khan",
    country="India",
    release_year=2020,
)

for name, result in results.items():
    print(name)
    if isinstance(result, int):
        print(result)
    else:
        display(result)
