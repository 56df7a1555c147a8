"""
Input validation schemas using Pydantic: catalog records, kid/assignment input and the plan document.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional

from activities.utilities.constants import DAYS, SLOTS, PERIODS, GRADES, DEFAULT_KID_COLOR

HEX_COLOR_PATTERN = r'^#[0-9a-fA-F]{3}([0-9a-fA-F]{3})?$'


class ActivityInput(BaseModel):
    """Schema for one catalog record."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    day: str
    slot: str
    time: Optional[str] = None
    grades: str = ""
    price: float = Field(..., ge=0)
    period: str
    provider: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    materials_fee: Optional[float] = Field(None, ge=0)
    materials_key: Optional[str] = None
    bundle_key: Optional[str] = None

    @field_validator('day')
    @classmethod
    def validate_day(cls, v):
        if v not in DAYS:
            raise ValueError(f"day must be one of {', '.join(DAYS)}")
        return v

    @field_validator('slot')
    @classmethod
    def validate_slot(cls, v):
        if v not in SLOTS:
            raise ValueError(f"slot must be one of {', '.join(SLOTS)}")
        return v

    @field_validator('period')
    @classmethod
    def validate_period(cls, v):
        if v not in PERIODS:
            raise ValueError(f"period must be one of {', '.join(PERIODS)}")
        return v

    @model_validator(mode='after')
    def materials_fee_needs_key(self):
        """A one-time materials fee is deduplicated by key, so the key is mandatory."""
        if self.materials_fee is not None and not self.materials_key:
            raise ValueError(f"activity '{self.id}' has materials_fee without materials_key")
        return self


class KidInput(BaseModel):
    """Schema for registering a kid."""
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(DEFAULT_KID_COLOR, pattern=HEX_COLOR_PATTERN)
    grade: str = "1st"

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        """Remove leading/trailing whitespace and refuse blank names."""
        if not v.strip():
            raise ValueError('Kid name cannot be empty')
        return v.strip()

    @field_validator('grade')
    @classmethod
    def validate_grade(cls, v):
        if v not in GRADES:
            raise ValueError(f"grade must be one of {', '.join(GRADES)}")
        return v


class AssignmentToggleInput(BaseModel):
    """Schema for assigning/unassigning a kid to an activity."""
    activity_id: str = Field(..., min_length=1)
    kid_id: str = Field(..., min_length=1)


class KidDocument(BaseModel):
    """Kid record inside a plan document. Older documents have no grade."""
    id: str = Field(..., min_length=1)
    name: str
    color: str = DEFAULT_KID_COLOR
    grade: Optional[str] = None

    @field_validator('grade')
    @classmethod
    def validate_grade(cls, v):
        if v is not None and v not in GRADES:
            raise ValueError(f"grade must be one of {', '.join(GRADES)}")
        return v


class PlanDocument(BaseModel):
    """Schema of the persisted / exported plan document."""
    kids: List[KidDocument] = Field(default_factory=list)
    assignments: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator('kids')
    @classmethod
    def unique_kid_ids(cls, v):
        ids = [k.id for k in v]
        if len(ids) != len(set(ids)):
            raise ValueError('Kid ids must be unique')
        return v
