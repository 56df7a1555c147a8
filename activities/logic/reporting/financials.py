"""Financial summary of a plan.

Pricing rules:
  - month items add their price to the monthly total
  - term items add their price to the term total, and price/3 to the monthly
    total when the normalized-monthly view is on
  - materials fees are one-time, charged once per kid per materials_key
  - bundle activities (e.g. psychomotricity Mon+Thu) are not summed per item;
    the kid pays one tiered term price by number of selections (1 day 75, 2+ days 135)
"""
from collections import defaultdict
from typing import Any, Dict, Mapping

from activities.domain.Activity import Activity
from activities.domain.Plan import Plan
from activities.utilities.constants import BUNDLE_TARIFFS, MONTHS_PER_TERM


def _index(catalog) -> Mapping[str, Activity]:
    if isinstance(catalog, Mapping):
        return catalog
    return {a.id: a for a in catalog}


def bundle_price(bundle_key: str, selections: int) -> float:
    """Per-term price for ``selections`` activities of a bundle (capped at the last tier)."""
    tiers = BUNDLE_TARIFFS[bundle_key]
    if selections <= 0:
        return 0
    return tiers[min(selections, len(tiers)) - 1]


def compute_financials(plan: Plan, catalog, normalize_monthly: bool = True) -> Dict[str, Any]:
    """Aggregate monthly, term and materials costs per kid and overall.

    Returns structure:
    {
      'per_kid': { kid_id: {'monthly': float, 'term': float, 'materials': float}, ... },
      'total_monthly': float, 'total_term': float, 'total_materials': float
    }
    Assignments referencing unknown activities or kids are ignored.
    """
    index = _index(catalog)
    per_kid = {kid.id: {'monthly': 0.0, 'term': 0.0, 'materials': 0.0} for kid in plan.kids}
    charged_materials = defaultdict(set)

    bundle_counts: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for activity_id, kid_ids in plan.assignments.items():
        act = index.get(activity_id)
        if not act or act.bundle_key not in BUNDLE_TARIFFS:
            continue
        for kid_id in kid_ids:
            bundle_counts[kid_id][act.bundle_key] += 1

    for activity_id, kid_ids in plan.assignments.items():
        act = index.get(activity_id)
        if not act:
            continue
        for kid_id in kid_ids:
            agg = per_kid.get(kid_id)
            if agg is None:
                continue
            if act.materials_fee and act.materials_key and act.materials_key not in charged_materials[kid_id]:
                charged_materials[kid_id].add(act.materials_key)
                agg['materials'] += act.materials_fee
            if act.bundle_key in BUNDLE_TARIFFS:
                continue
            if act.is_monthly:
                agg['monthly'] += act.price
            else:
                agg['term'] += act.price
                if normalize_monthly:
                    agg['monthly'] += act.price / MONTHS_PER_TERM

    for kid in plan.kids:
        agg = per_kid[kid.id]
        for key, count in bundle_counts.get(kid.id, {}).items():
            term_price = bundle_price(key, count)
            agg['term'] += term_price
            if normalize_monthly:
                agg['monthly'] += term_price / MONTHS_PER_TERM

    return {
        'per_kid': per_kid,
        'total_monthly': sum((a['monthly'] for a in per_kid.values()), 0.0),
        'total_term': sum((a['term'] for a in per_kid.values()), 0.0),
        'total_materials': sum((a['materials'] for a in per_kid.values()), 0.0),
    }


__all__ = ['bundle_price', 'compute_financials']
