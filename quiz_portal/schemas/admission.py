from pydantic import BaseModel
from typing import Optional
from uuid import UUID


class AdmissionEntry(BaseModel):
    start: str
    end: str

    model_config = {"frozen": True}


class AdmissionRangeView(BaseModel):
    id: Optional[UUID] = None
    department: str
    year: int
    section: str
    is_active: bool = True
    regular_entry: AdmissionEntry
    lateral_entry: AdmissionEntry

    model_config = {"from_attributes": True, "frozen": True}


class AdmissionCheck(BaseModel):
    ok: bool
    error: Optional[str] = None
    message: Optional[str] = None
    allowed_start: Optional[str] = None
    allowed_end: Optional[str] = None
