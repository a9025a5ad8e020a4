# peertutor/schemas.py

from datetime import datetime, date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from .errors import ParseError
from .timeutils import WEEKDAYS, to_24_hour


class SlotType(str, Enum):
    recurring = "recurring"
    specific_date = "specific_date"


class SlotStatus(str, Enum):
    available = "Available"
    booked = "Booked"
    expired = "Expired"


class SubjectCategory(str, Enum):
    ap = "ap"
    aice = "aice"
    core = "core"
    specialized = "specialized"


class Slot(BaseModel):
    id: str
    slot_type: SlotType
    day_of_week: Optional[str] = None      # recurring only
    specific_date: Optional[date] = None   # specific_date only
    start_time: str                        # "7:00 AM"
    end_time: str                          # "7:45 AM"
    subject: str
    status: SlotStatus = SlotStatus.available
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    next_occurrence: datetime
    expiry_date: Optional[datetime] = None
    max_capacity: int = 1
    created_at: datetime

    @model_validator(mode="after")
    def check_shape(self):
        if self.slot_type == SlotType.recurring:
            if self.day_of_week is None or self.specific_date is not None:
                raise ValueError("recurring slots need day_of_week and no specific_date")
            if self.day_of_week not in WEEKDAYS:
                raise ValueError(f"invalid day_of_week {self.day_of_week!r}")
        else:
            if self.specific_date is None or self.day_of_week is not None:
                raise ValueError("specific_date slots need specific_date and no day_of_week")

        if self.status == SlotStatus.booked and self.student_name is None:
            raise ValueError("booked slots need a student_name")
        if self.status != SlotStatus.booked and self.student_name is not None:
            raise ValueError("only booked slots carry a student_name")

        if self.max_capacity != 1:
            raise ValueError("max_capacity is fixed at 1")

        try:
            to_24_hour(self.start_time)
            to_24_hour(self.end_time)
        except ParseError as exc:
            raise ValueError(str(exc))
        return self

    @property
    def is_recurring(self) -> bool:
        return self.slot_type == SlotType.recurring

    @property
    def day_label(self) -> str:
        if self.is_recurring:
            return self.day_of_week
        return self.specific_date.isoformat()

    @property
    def time_label(self) -> str:
        return f"{self.start_time}-{self.end_time}"


class TutorRecord(BaseModel):
    id: str
    name: str
    bio: str = ""
    grade_level: str = ""
    is_admin: bool = False
    subjects: List[str] = []
    slots: List[Slot] = []
    version: int = 0
    created_at: Optional[datetime] = None

    def find_slot(self, slot_id: str) -> Optional[int]:
        for index, slot in enumerate(self.slots):
            if slot.id == slot_id:
                return index
        return None


class SubjectRecord(BaseModel):
    id: str
    name: str
    category: SubjectCategory
    icon: str = "book-open"
    badge: Optional[str] = None


# ---- API bodies / responses ----

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class CurrentTutor(BaseModel):
    id: str
    name: str
    is_admin: bool = False


class TutorCreate(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: Optional[str] = None
    password: str = Field(min_length=4, max_length=72)
    is_admin: bool = False


class TutorPublic(BaseModel):
    id: str
    name: str
    bio: str
    grade_level: str
    is_admin: bool
    subjects: List[str]
    slots: List[Slot]


class ProfileUpdate(BaseModel):
    bio: Optional[str] = None
    grade_level: Optional[str] = None
    subjects: Optional[List[str]] = None


class SlotCreate(BaseModel):
    slot_type: SlotType
    day_of_week: Optional[str] = None
    specific_date: Optional[date] = None
    time_slot_id: str
    subjects: List[str]


class BookingCreate(BaseModel):
    student_name: str = Field(min_length=1, max_length=120)
    student_email: Optional[str] = None


class BookingResult(BaseModel):
    tutor_id: str
    slot: Slot


class TutorListing(BaseModel):
    id: str
    name: str
    bio: str
    grade_level: str
    slots: List[Slot]


class SessionEntry(BaseModel):
    tutor_id: str
    tutor_name: str
    slot: Slot


class SubjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    category: SubjectCategory = SubjectCategory.core
    icon: str = "book-open"
    badge: Optional[str] = None


class SweepReport(BaseModel):
    tutors_scanned: int = 0
    tutors_updated: int = 0
    slots_expired: int = 0
    slots_rolled: int = 0
    failures: Dict[str, str] = {}
