# Databricks notebook source
# MAGIC %md
# MAGIC # 00 - Setup
# MAGIC Creates the reporting database and sets common Spark configs.
# MAGIC The titles table itself is populated by the external loader.

from netflix_reports.config import Databases, Tables

spark.conf.set("spark.sql.session.timeZone", "UTC")
# dateAdded is parsed with several patterns; never fail on the legacy parser check
spark.conf.set("spark.sql.legacy.timeParserPolicy", "CORRECTED")

dbs = Databases()
spark.sql(f"CREATE DATABASE IF NOT EXISTS {dbs.reports}")

if not spark.catalog.tableExists(f"{dbs.titles}.{Tables().titles}"):
    print(f"Titles table {dbs.titles}.{Tables().titles} not found; run the loader first.")

print("Setup complete.")
