"""Activity domain entity: one catalog entry (day, slot, time, grades, pricing)."""
from typing import Optional


class Activity:
    __slots__ = ("id", "name", "day", "slot", "time", "grades", "price", "period",
                 "provider", "location", "notes", "materials_fee", "materials_key", "bundle_key")

    def __init__(self, id: str, name: str, day: str, slot: str, grades: str = "",
                 price: float = 0, period: str = "month", time: Optional[str] = None,
                 provider: Optional[str] = None, location: Optional[str] = None,
                 notes: Optional[str] = None, materials_fee: Optional[float] = None,
                 materials_key: Optional[str] = None, bundle_key: Optional[str] = None):
        set_ = object.__setattr__
        set_(self, "id", id)
        set_(self, "name", name)
        set_(self, "day", day)
        set_(self, "slot", slot)
        set_(self, "time", time)
        set_(self, "grades", grades)
        set_(self, "price", price)
        set_(self, "period", period)
        set_(self, "provider", provider)
        set_(self, "location", location)
        set_(self, "notes", notes)
        set_(self, "materials_fee", materials_fee)
        set_(self, "materials_key", materials_key)
        set_(self, "bundle_key", bundle_key)

    def __setattr__(self, name, value):
        raise AttributeError(f"Activity is read-only (tried to set '{name}')")

    def __eq__(self, other):
        return isinstance(other, Activity) and self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.id)

    def __str__(self) -> str:
        when = self.time or f"{self.slot} slot"
        return f"{self.name} - {self.day} {when} - Grades: {self.grades} - {self.price}/{self.period}"

    __repr__ = __str__

    @property
    def is_monthly(self) -> bool:
        return self.period == "month"

    @staticmethod
    def from_dict(data):
        '''Creates an Activity from a catalog record. Ignores unknown keys.'''
        allowed = set(Activity.__slots__)
        return Activity(**{k: v for k, v in dict(data).items() if k in allowed})

    def to_dict(self):
        d = {k: getattr(self, k) for k in self.__slots__}
        return {k: v for k, v in d.items() if v is not None}
