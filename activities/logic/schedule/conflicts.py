"""Schedule conflict detection.

A conflict is the same kid assigned to two activities on the same day and slot
whose time ranges overlap. Activities without a time occupy the whole slot
(see SLOT_FALLBACK_RANGES); a time that cannot be parsed is reported as a
conflict rather than silently skipped.
"""
from typing import Any, Dict, List, Mapping, Optional

from activities.domain.Activity import Activity
from activities.domain.Plan import Plan
from activities.logic.schedule.time_ranges import TimeRange, parse_range, overlaps
from activities.utilities.constants import DAYS, SLOTS, SLOT_FALLBACK_RANGES


def effective_range(activity: Activity) -> Optional[TimeRange]:
    return parse_range(activity.time or SLOT_FALLBACK_RANGES.get(activity.slot))


def _catalog_list(catalog) -> List[Activity]:
    if isinstance(catalog, Mapping):
        return list(catalog.values())
    return list(catalog)


def find_conflicts(plan: Plan, catalog) -> List[Dict[str, Any]]:
    """List every overlapping pair of a kid's activities.

    ``catalog`` may be the activity list or the id -> Activity index; pairs keep
    catalog order. Result ordering: kid, day (Mon..Fri), slot (Midday, Afternoon),
    catalog pair order. Each entry is
    ``{'kid': Child, 'day': str, 'slot': str, 'activity_a': Activity, 'activity_b': Activity}``.
    """
    activities = _catalog_list(catalog)
    result: List[Dict[str, Any]] = []
    for kid in plan.kids:
        for day in DAYS:
            for slot in SLOTS:
                selected = [a for a in activities
                            if a.day == day and a.slot == slot and plan.is_assigned(a.id, kid.id)]
                for i, a in enumerate(selected):
                    for b in selected[i + 1:]:
                        ra, rb = effective_range(a), effective_range(b)
                        if ra is None or rb is None or overlaps(ra, rb):
                            result.append({'kid': kid, 'day': day, 'slot': slot,
                                           'activity_a': a, 'activity_b': b})
    return result


def conflict_to_dict(conflict: Dict[str, Any]) -> Dict[str, Any]:
    kid, a, b = conflict['kid'], conflict['activity_a'], conflict['activity_b']
    return {
        'kid_id': kid.id,
        'kid_name': kid.name,
        'day': conflict['day'],
        'slot': conflict['slot'],
        'activity_a': {'id': a.id, 'name': a.name, 'time': a.time},
        'activity_b': {'id': b.id, 'name': b.name, 'time': b.time},
    }


__all__ = ['effective_range', 'find_conflicts', 'conflict_to_dict']
