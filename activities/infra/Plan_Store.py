"""Plan store: owns the mutable plan and mediates every mutation.

Mutations are serialized by a lock. Each one works on a copy of the plan which
replaces the current plan only once the repository has saved it, then it is
announced on the event bus. Assignments are checked for grade
eligibility only when they are added; removing is always allowed.
"""
import logging
from enum import Enum
from threading import Lock
from typing import Iterable, Optional
from uuid import uuid4

from activities.domain.Activity import Activity
from activities.domain.Child import Child
from activities.domain.Plan import Plan
from activities.events.Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_CHANGED, PLAN_ASSIGNMENT_REJECTED, PLAN_REPLACED
)
from activities.infra.Catalog_Repository import index_catalog
from activities.infra.Plan_Repository import PlanRepository
from activities.logic.eligibility.grades import is_eligible
from activities.logic.reporting.financials import compute_financials
from activities.logic.schedule.conflicts import find_conflicts
from activities.utilities.constants import GRADES, DEFAULT_GRADE, DEFAULT_KID_COLOR

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    UNKNOWN_ACTIVITY = "unknown_activity"
    UNKNOWN_KID = "unknown_kid"
    NOT_ELIGIBLE = "not_eligible"


class AssignmentResult:
    def __init__(self, ok: bool, action: Optional[str] = None,
                 reason: Optional[RejectionReason] = None, message: str = ""):
        self.ok = ok
        self.action = action
        self.reason = reason
        self.message = message

    def __bool__(self):
        return self.ok

    def __repr__(self) -> str:
        return f"AssignmentResult(ok={self.ok}, action={self.action}, reason={self.reason})"

    def to_dict(self):
        return {
            "ok": self.ok,
            "action": self.action,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
        }


class PlanStore:
    def __init__(self, repository: PlanRepository, catalog: Iterable[Activity], event_bus=None):
        self.repository = repository
        self.catalog = index_catalog(catalog)
        self._event_bus = event_bus or GLOBAL_EVENT_BUS
        self._lock = Lock()
        self.plan = repository.load() or Plan()

    def _commit(self, plan: Plan, action: str, **details):
        # caller holds the lock; a failed save leaves self.plan untouched
        self.repository.save(plan)
        self.plan = plan
        self._event_bus.publish(PLAN_CHANGED, {"action": action, "plan": plan, **details})

    # --- Kids ---------------------------------------------------------------
    def add_kid(self, name: str, color: str = DEFAULT_KID_COLOR, grade: str = DEFAULT_GRADE) -> Child:
        name = (name or "").strip()
        if not name:
            raise ValueError("Kid name cannot be empty")
        if grade not in GRADES:
            raise ValueError(f"Unknown grade: {grade}")
        kid = Child(uuid4().hex[:8], name, color, grade)
        with self._lock:
            plan = self.plan.copy()
            plan.kids.append(kid)
            self._commit(plan, "kid_added", kid_id=kid.id)
        logger.info(f"Added kid {kid}")
        return kid

    def remove_kid(self, kid_id: str) -> bool:
        """Remove a kid and every assignment referencing it. Returns False if unknown."""
        with self._lock:
            if self.plan.find_kid(kid_id) is None:
                return False
            plan = Plan(
                [k for k in self.plan.kids if k.id != kid_id],
                {activity_id: [k for k in kid_ids if k != kid_id]
                 for activity_id, kid_ids in self.plan.assignments.items()},
            )
            self._commit(plan, "kid_removed", kid_id=kid_id)
        logger.info(f"Removed kid {kid_id}")
        return True

    # --- Assignments --------------------------------------------------------
    def check_eligibility(self, activity_id: str, kid_id: str) -> AssignmentResult:
        activity = self.catalog.get(activity_id)
        if activity is None:
            return AssignmentResult(False, reason=RejectionReason.UNKNOWN_ACTIVITY,
                                    message=f"Unknown activity: {activity_id}")
        kid = self.plan.find_kid(kid_id)
        if kid is None:
            return AssignmentResult(False, reason=RejectionReason.UNKNOWN_KID,
                                    message=f"Unknown kid: {kid_id}")
        if not is_eligible(activity, kid):
            return AssignmentResult(
                False, reason=RejectionReason.NOT_ELIGIBLE,
                message=f"{kid.name} ({kid.grade}) is not eligible for {activity.name} ({activity.grades}).")
        return AssignmentResult(True)

    def toggle_assignment(self, activity_id: str, kid_id: str) -> AssignmentResult:
        """Assign the kid if not assigned yet (eligibility permitting), otherwise unassign."""
        with self._lock:
            plan = self.plan.copy()
            current = plan.assignments.get(activity_id, [])
            if kid_id in current:
                plan.assignments[activity_id] = [k for k in current if k != kid_id]
                self._commit(plan, "unassigned", activity_id=activity_id, kid_id=kid_id)
                return AssignmentResult(True, action="removed")

            check = self.check_eligibility(activity_id, kid_id)
            if not check:
                logger.info(f"Assignment rejected ({check.reason.value}): {check.message}")
                self._event_bus.publish(PLAN_ASSIGNMENT_REJECTED, {
                    "activity_id": activity_id, "kid_id": kid_id, "reason": check.reason.value
                })
                return check
            plan.assignments[activity_id] = current + [kid_id]
            self._commit(plan, "assigned", activity_id=activity_id, kid_id=kid_id)
            return AssignmentResult(True, action="added")

    # --- Whole plan ---------------------------------------------------------
    def replace(self, plan: Plan) -> None:
        """Replace the whole plan (import); no merge with the current one."""
        plan = plan.copy()
        with self._lock:
            self.repository.save(plan)
            self.plan = plan
            self._event_bus.publish(PLAN_REPLACED, {"plan": plan})
        logger.info(f"Plan replaced: {plan}")

    def reload(self) -> Plan:
        """Re-read the plan from disk (after a backup was restored over it)."""
        with self._lock:
            self.plan = self.repository.load() or Plan()
            self._event_bus.publish(PLAN_REPLACED, {"plan": self.plan})
        logger.info(f"Plan reloaded: {self.plan}")
        return self.plan

    def clear(self) -> None:
        with self._lock:
            self._commit(Plan(), "cleared")

    # --- Queries ------------------------------------------------------------
    def financials(self, normalize_monthly: bool = True):
        return compute_financials(self.plan, self.catalog, normalize_monthly)

    def conflicts(self):
        return find_conflicts(self.plan, self.catalog)


__all__ = ['PlanStore', 'AssignmentResult', 'RejectionReason']
