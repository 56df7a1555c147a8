"""Catalog loading (static JSON resource), validation and lookup helpers."""
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from activities.domain.Activity import Activity
from activities.domain.Plan import Plan
from activities.infra.paths import CATALOG_FILE
from activities.utilities.constants import DAYS, SLOTS
from activities.utilities.validators import ActivityInput

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """The catalog resource is missing or violates its schema."""


def parse_catalog(records) -> List[Activity]:
    if not isinstance(records, list):
        raise CatalogError("Catalog must be a JSON list of activities")
    activities: List[Activity] = []
    seen = set()
    for i, record in enumerate(records):
        try:
            validated = ActivityInput.model_validate(record)
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog entry #{i}: {e}") from e
        if validated.id in seen:
            raise CatalogError(f"Duplicate activity id in catalog: {validated.id}")
        seen.add(validated.id)
        activities.append(Activity.from_dict(validated.model_dump()))
    return activities


def load_catalog(path: Optional[Path] = None) -> List[Activity]:
    """Read and validate the activity catalog."""
    path = Path(path or CATALOG_FILE)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in catalog file {path}: {e}") from e
    activities = parse_catalog(records)
    logger.info(f"Loaded {len(activities)} activities from {path}")
    return activities


def index_catalog(activities: Iterable[Activity]) -> Dict[str, Activity]:
    return {a.id: a for a in activities}


def filter_catalog(activities: Iterable[Activity], plan: Plan, *, kid_id: Optional[str] = None,
                   day: Optional[str] = None, slot: Optional[str] = None,
                   only_assigned: bool = False) -> List[Activity]:
    """Filter the catalog the way the schedule view does.

    Day/slot restrict the list. With only_assigned, keep activities assigned to
    the selected kid (or to anyone if no kid is selected); otherwise a selected
    kid restricts the list to that kid's activities.
    """
    result = []
    for a in activities:
        if slot and a.slot != slot:
            continue
        if day and a.day != day:
            continue
        assigned = plan.assigned_kids(a.id)
        if kid_id:
            if kid_id not in assigned:
                continue
        elif only_assigned and not assigned:
            continue
        result.append(a)
    return result


def group_by_day_slot(activities: Iterable[Activity]) -> Dict[str, Dict[str, List[Activity]]]:
    grouped = {day: {slot: [] for slot in SLOTS} for day in DAYS}
    for a in activities:
        grouped[a.day][a.slot].append(a)
    return grouped


__all__ = ['CatalogError', 'parse_catalog', 'load_catalog', 'index_catalog',
           'filter_catalog', 'group_by_day_slot']
