"""Utilities to ingest meals CSV files into the datastore.

This module provides:
- parse_meals_csv(csv_path): returns a list of meal property dicts
- seed_meals_from_csv(csv_path, session): idempotently stores them as Meal entities

Expected columns are `id`, `title`, `description`, `ingredients` and `type`.
Ingredients may be a JSON list or a comma/semicolon separated string.
"""
from __future__ import annotations

from typing import List, Dict
import json
import math
import re

import pandas as pd

from core.datastore import SqlDatastore
from core.logger import get_logger
from database.database import WriteSessionLocal, MEAL_KIND
from schemas.meal_schema import INT64_MAX

logger = get_logger("data.ingest_meals")

_SEPARATORS = re.compile(r"[;,]")
_ASCII_ID = re.compile(r"[0-9]+")


def _text(val) -> str:
    """Return a stripped string, treating NaN/None cells as empty."""
    if val is None or (isinstance(val, float) and math.isnan(val)):
        return ""
    return str(val).strip()


def parse_ingredients(raw) -> List[str]:
    """Parse an ingredients cell into a list of names.

    Args:
        raw: Cell value, either a JSON list or a separated string.

    Returns:
        List of non-empty ingredient names in their original order.
    """
    text = _text(raw)
    if not text:
        return []
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(i).strip() for i in parsed if str(i).strip()]
    return [i.strip() for i in _SEPARATORS.split(text) if i.strip()]


def parse_meals_csv(csv_path: str) -> List[Dict]:
    """Parse the CSV and return a list of meal property dicts.

    Rows whose id is not an ASCII integer within the 64-bit range are skipped.

    Args:
        csv_path: Path to the meals CSV file.

    Returns:
        List of dicts with keys: id, title, description, ingredients, type.
    """
    logger.info("Parsing meals CSV: %s", csv_path)
    df = pd.read_csv(csv_path, encoding="utf-8", dtype=str, keep_default_na=False)
    df = df.rename(columns=lambda s: s.strip().lower())

    meals = []
    for _, row in df.iterrows():
        raw_id = _text(row.get("id"))
        if not _ASCII_ID.fullmatch(raw_id) or int(raw_id) > INT64_MAX:
            logger.warning("Skipping CSV row without a valid numeric id: %r", raw_id)
            continue
        meals.append({
            "id": int(raw_id),
            "title": _text(row.get("title")),
            "description": _text(row.get("description")),
            "ingredients": parse_ingredients(row.get("ingredients")),
            "type": _text(row.get("type")),
        })

    logger.info("Parsed %s meals from CSV", len(meals))
    return meals


def seed_meals_from_csv(csv_path: str, session=None) -> int:
    """Idempotently store the meals of a CSV file as Meal entities.

    If `session` is not supplied, a `WriteSessionLocal` session is used.
    Meals whose id is already stored are skipped.

    Args:
        csv_path: Path to the meals CSV file.
        session: Optional SQLAlchemy session. If None, creates a new one.

    Returns:
        Number of meals added.
    """
    close_session = False
    if session is None:
        session = WriteSessionLocal()
        close_session = True
    try:
        store = SqlDatastore(session)
        added = 0
        for item in parse_meals_csv(csv_path):
            if store.query_by_field(MEAL_KIND, "id", item["id"]):
                continue
            store.put(MEAL_KIND, item)
            added += 1
        logger.info("Seeded %s new meals into the datastore", added)
        return added
    finally:
        if close_session:
            session.close()


if __name__ == "__main__":
    import argparse

    from database import init_db

    p = argparse.ArgumentParser("Seed meals from CSV into the datastore")
    p.add_argument("csv_path", nargs="?", default="data/fixtures/meals.csv")
    args = p.parse_args()
    init_db(seed=False)
    print("Added %d meals" % seed_meals_from_csv(args.csv_path))
