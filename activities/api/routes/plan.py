import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from activities.api.store import get_store
from activities.infra.Plan_Store import PlanStore
from activities.utilities.validators import KidInput, AssignmentToggleInput

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/plan")
def get_plan(store: PlanStore = Depends(get_store)):
    return store.plan.to_dict()


@router.post("/api/kids", status_code=201)
def add_kid(payload: KidInput, store: PlanStore = Depends(get_store)):
    kid = store.add_kid(payload.name, payload.color, payload.grade)
    return kid.to_dict()


@router.delete("/api/kids/{kid_id}")
def remove_kid(kid_id: str, store: PlanStore = Depends(get_store)):
    if not store.remove_kid(kid_id):
        raise HTTPException(status_code=404, detail="Kid not found")
    return {"success": True}


@router.get("/api/eligibility")
def eligibility(activity_id: str = Query(...), kid_id: str = Query(...),
                store: PlanStore = Depends(get_store)):
    """Ask before assigning: is this kid allowed in this activity?"""
    return store.check_eligibility(activity_id, kid_id).to_dict()


@router.post("/api/assignments/toggle")
def toggle_assignment(payload: AssignmentToggleInput, store: PlanStore = Depends(get_store)):
    result = store.toggle_assignment(payload.activity_id, payload.kid_id)
    if not result:
        raise HTTPException(status_code=400, detail=result.to_dict())
    return {**result.to_dict(), "assigned": store.plan.assigned_kids(payload.activity_id)}


@router.post("/api/plan/clear")
def clear_plan(store: PlanStore = Depends(get_store)):
    store.clear()
    return {"success": True}
