"""Plan aggregate: registered kids plus the activity -> kid ids assignment map."""
from typing import Dict, List, Optional, Tuple

from activities.domain.Child import Child


class Plan:
    def __init__(self, kids: Optional[List[Child]] = None, assignments: Optional[Dict[str, List[str]]] = None):
        self.kids = kids[:] if kids else []
        self.assignments = {k: list(v) for k, v in (assignments or {}).items()}

    def __eq__(self, other):
        return isinstance(other, Plan) and self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        assigned = sum(len(v) for v in self.assignments.values())
        return f"Plan - {len(self.kids)} kids - {assigned} assignments"

    __repr__ = __str__

    def find_kid(self, kid_id: str) -> Optional[Child]:
        for kid in self.kids:
            if kid.id == kid_id:
                return kid
        return None

    def assigned_kids(self, activity_id: str) -> List[str]:
        return self.assignments.get(activity_id, [])

    def is_assigned(self, activity_id: str, kid_id: str) -> bool:
        return kid_id in self.assignments.get(activity_id, [])

    def copy(self) -> "Plan":
        return Plan([Child.from_dict(k.to_dict()) for k in self.kids], self.assignments)

    @staticmethod
    def from_dict_with_migration(data) -> Tuple["Plan", bool]:
        """Build a Plan from a plan document.

        Returns (plan, migrated). ``migrated`` is True when the document needed
        fixing: kids without a grade (older schema) or duplicate ids inside an
        assignment list.
        """
        d = data if isinstance(data, dict) else {}
        migrated = False
        kids = []
        for raw in d.get("kids") or []:
            if not raw.get("grade"):
                migrated = True
            kids.append(Child.from_dict(raw))
        assignments: Dict[str, List[str]] = {}
        for activity_id, kid_ids in (d.get("assignments") or {}).items():
            unique = list(dict.fromkeys(kid_ids or []))
            if len(unique) != len(kid_ids or []):
                migrated = True
            assignments[activity_id] = unique
        return Plan(kids, assignments), migrated

    @staticmethod
    def from_dict(data) -> "Plan":
        return Plan.from_dict_with_migration(data)[0]

    def to_dict(self):
        '''Converts the Plan to the plan document used for persistence and export.'''
        return {
            "kids": [kid.to_dict() for kid in self.kids],
            "assignments": {k: list(v) for k, v in self.assignments.items()},
        }
