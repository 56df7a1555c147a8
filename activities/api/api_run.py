from fastapi import FastAPI, Request, Query, Depends, HTTPException, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from typing import Optional
import logging

from activities.api.store import get_store
from activities.api.routes import plan as plan_routes
from activities.api.routes import transfer
from activities.infra.Catalog_Repository import filter_catalog, group_by_day_slot
from activities.infra.Plan_Store import PlanStore
from activities.infra.pdf_utils import generate_pdf_for_plan
from activities.logic.eligibility.grades import is_eligible
from activities.logic.schedule.conflicts import conflict_to_dict
from activities.utilities.config import NORMALIZE_MONTHLY_DEFAULT, CURRENCY_SYMBOL, TEMPLATES_DIR
from activities.utilities.constants import DAYS, SLOTS, GRADES

# Logging
logger = logging.getLogger("activities_app")

# Initialize FastAPI app
app = FastAPI(title="Activities Planner API")

# Include routers
app.include_router(plan_routes.router)
app.include_router(transfer.router)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


# -------------------- Helpers --------------------
def _check_filters(day: Optional[str], slot: Optional[str]):
    if day and day not in DAYS:
        raise HTTPException(status_code=400, detail=f"Invalid day (expected one of {', '.join(DAYS)})")
    if slot and slot not in SLOTS:
        raise HTTPException(status_code=400, detail=f"Invalid slot (expected one of {', '.join(SLOTS)})")


def _activity_dict(activity, store: PlanStore):
    d = activity.to_dict()
    d["assigned"] = store.plan.assigned_kids(activity.id)
    return d


# -------------------- UI PAGE --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request,
              kid: Optional[str] = Query(default=None),
              day: Optional[str] = Query(default=None),
              slot: Optional[str] = Query(default=None),
              only_assigned: bool = Query(default=False),
              normalized: bool = Query(default=NORMALIZE_MONTHLY_DEFAULT),
              store: PlanStore = Depends(get_store)):
    _check_filters(day, slot)
    plan = store.plan
    visible = filter_catalog(store.catalog.values(), plan, kid_id=kid, day=day, slot=slot,
                             only_assigned=only_assigned)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "plan": plan,
            "grid": group_by_day_slot(visible),
            "days": [d for d in DAYS if not day or d == day],
            "slots": [s for s in SLOTS if not slot or s == slot],
            "grades": GRADES,
            "financials": store.financials(normalized),
            "conflicts": store.conflicts(),
            "normalized": normalized,
            "currency": CURRENCY_SYMBOL,
            "is_eligible": is_eligible,
        }
    )


# -------------------- API: Catalog --------------------
@app.get("/api/catalog")
def api_catalog(kid: Optional[str] = Query(default=None),
                day: Optional[str] = Query(default=None),
                slot: Optional[str] = Query(default=None),
                only_assigned: bool = Query(default=False),
                grouped: bool = Query(default=False),
                store: PlanStore = Depends(get_store)):
    """Return catalog activities (optionally filtered, optionally grouped by day and slot)."""
    _check_filters(day, slot)
    visible = filter_catalog(store.catalog.values(), store.plan, kid_id=kid, day=day, slot=slot,
                             only_assigned=only_assigned)
    if grouped:
        return {
            d: {s: [_activity_dict(a, store) for a in acts] for s, acts in by_slot.items()}
            for d, by_slot in group_by_day_slot(visible).items()
        }
    return {"count": len(visible), "activities": [_activity_dict(a, store) for a in visible]}


# -------------------- API: Financials & Conflicts --------------------
@app.get("/api/financials")
def api_financials(normalized: bool = Query(default=NORMALIZE_MONTHLY_DEFAULT),
                   store: PlanStore = Depends(get_store)):
    return {"normalized": normalized, "currency": CURRENCY_SYMBOL, **store.financials(normalized)}


@app.get("/api/conflicts")
def api_conflicts(store: PlanStore = Depends(get_store)):
    conflicts = [conflict_to_dict(c) for c in store.conflicts()]
    return {"count": len(conflicts), "conflicts": conflicts}


@app.get("/export_pdf")
def export_pdf(normalized: bool = Query(default=NORMALIZE_MONTHLY_DEFAULT),
               store: PlanStore = Depends(get_store)):
    pdf_bytes = generate_pdf_for_plan(store.plan, list(store.catalog.values()),
                                      store.financials(normalized), store.conflicts())
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="activities-plan.pdf"'},
    )
