"""Plan persistence: the plan document stored as a local JSON file."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from activities.domain.Plan import Plan
from activities.infra.paths import PLAN_FILE
from activities.utilities.validators import PlanDocument

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or PLAN_FILE)

    def load(self) -> Optional[Plan]:
        """Return the saved plan, or None if there is none or it cannot be read.

        Documents from the older schema (kids without grade) are migrated and
        written back immediately so the conversion happens only once.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            document = PlanDocument.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable plan file {self.path}: {e}")
            return None
        plan, migrated = Plan.from_dict_with_migration(document.model_dump())
        if migrated:
            logger.info(f"Migrated plan document {self.path} to the current schema")
            self.save(plan)
        return plan

    def save(self, plan: Plan) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".plan_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(plan.to_dict(), tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
