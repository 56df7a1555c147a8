"""Child domain entity: a kid registered in the plan (name, display colour, school grade)."""
from activities.utilities.constants import DEFAULT_GRADE, DEFAULT_KID_COLOR


class Child:
    def __init__(self, id: str, name: str, color: str = DEFAULT_KID_COLOR, grade: str = DEFAULT_GRADE):
        self.id = id
        self.name = name
        self.color = color
        self.grade = grade

    def __eq__(self, other):
        return isinstance(other, Child) and self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.name} ({self.grade})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Child from a plan document record; older records without grade get the default.'''
        d = dict(data)
        return Child(
            id=d["id"],
            name=d.get("name", ""),
            color=d.get("color") or DEFAULT_KID_COLOR,
            grade=d.get("grade") or DEFAULT_GRADE,
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "color": self.color, "grade": self.grade}
