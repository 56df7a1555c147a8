"""Process-wide PlanStore used by the web layer (overridable in tests via dependency_overrides)."""
from activities.infra.Catalog_Repository import load_catalog
from activities.infra.Plan_Repository import PlanRepository
from activities.infra.Plan_Store import PlanStore
from activities.infra.paths import PLAN_FILE

_store = None


def get_store() -> PlanStore:
    global _store
    if _store is None:
        _store = PlanStore(PlanRepository(PLAN_FILE), load_catalog())
    return _store
