"""
foodweb_atlas.reports — Summary report generation.

Modules:
    summary — FoodWebSummary, per-species table, console / Markdown / JSON export.
"""

from foodweb_atlas.reports.summary import (
    FoodWebSummary,
    export_summary_json,
    export_summary_markdown,
    species_table,
    summarize_food_web,
)
