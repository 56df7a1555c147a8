"""Plan export/import endpoints (JSON document download and upload)."""
import logging
from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import Response

from activities.api.store import get_store
from activities.infra.Plan_Store import PlanStore
from activities.utilities.backup import BackupManager
from activities.utilities.config import NORMALIZE_MONTHLY_DEFAULT
from activities.utilities.export_import import PlanExporter, PlanImporter, InvalidPlanDocument

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/plan/export")
def export_plan(store: PlanStore = Depends(get_store)):
    exporter = PlanExporter()
    return Response(
        content=exporter.export_json(store.plan),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{exporter.export_filename()}"'},
    )


@router.get("/api/financials.csv")
def export_financials_csv(normalized: bool = Query(default=NORMALIZE_MONTHLY_DEFAULT),
                          store: PlanStore = Depends(get_store)):
    csv_text = PlanExporter().export_financials_csv(store.plan, store.catalog, normalized)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="activities-financials.csv"'},
    )


def _backups(store: PlanStore) -> BackupManager:
    return BackupManager(store.repository.path.parent)


def _apply_import(raw, store: PlanStore):
    try:
        plan = PlanImporter().parse(raw)
    except InvalidPlanDocument as e:
        logger.warning(f"Rejected plan import: {e}")
        raise HTTPException(status_code=400, detail="Invalid import data")
    _backups(store).create_backup(store.repository.path.name)
    store.replace(plan)
    return {"success": True, "kids": len(plan.kids), "plan": plan.to_dict()}


@router.post("/api/plan/import")
async def import_plan(request: Request, store: PlanStore = Depends(get_store)):
    """Replace the plan with the JSON document sent as request body."""
    return _apply_import(await request.body(), store)


@router.post("/api/plan/import-file")
async def import_plan_file(file: UploadFile = File(...), store: PlanStore = Depends(get_store)):
    return _apply_import(await file.read(), store)


@router.get("/api/backups")
def list_backups(store: PlanStore = Depends(get_store)):
    """Plan backups taken before imports, newest first."""
    return {"backups": _backups(store).list_backups(store.repository.path.name)}


@router.post("/api/backups/{backup_name}/restore")
def restore_backup(backup_name: str, store: PlanStore = Depends(get_store)):
    manager = _backups(store)
    plan_name = store.repository.path.name
    if backup_name not in {b['name'] for b in manager.list_backups(plan_name)}:
        raise HTTPException(status_code=404, detail="Backup not found")
    if not manager.restore_backup(backup_name, plan_name):
        raise HTTPException(status_code=500, detail="Restore failed")
    plan = store.reload()
    return {"success": True, "kids": len(plan.kids), "plan": plan.to_dict()}
