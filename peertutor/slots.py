# peertutor/slots.py
"""
Slot construction and the tutor-side slot operations.

Slots are only ever created inside the eligibility windows of
``data.ELIGIBLE_TIME_SLOTS`` on ``data.ELIGIBLE_DAYS``. A creation request
produces one slot per selected subject, all sharing the same day and time.
"""

import logging
from datetime import datetime, date
from typing import Iterable, List, Optional
from uuid import uuid4

from .config import settings
from .data import ELIGIBLE_DAYS, ELIGIBLE_TIME_SLOTS
from .errors import ConflictError, NotFoundError, ValidationError
from .schemas import Slot, SlotCreate, SlotStatus, SlotType, TutorRecord
from .store import TutorStore
from .timeutils import combine, expiry_instant, is_expired, next_occurrence_of, weekday_name

logger = logging.getLogger(__name__)


def new_slot_id() -> str:
    return f"slot_{uuid4().hex}"


def _clean_subjects(subjects: Optional[Iterable[str]]) -> List[str]:
    cleaned = []
    for subject in subjects or []:
        subject = (subject or "").strip()
        if subject and subject not in cleaned:
            cleaned.append(subject)
    if not cleaned:
        raise ValidationError("Please select at least one subject")
    return cleaned


def _time_window(time_slot_id: Optional[str]) -> dict:
    if not time_slot_id:
        raise ValidationError("Please select a time slot")
    window = ELIGIBLE_TIME_SLOTS.get(time_slot_id)
    if window is None:
        raise ValidationError(f"Invalid time slot {time_slot_id!r}")
    return window


def _build(
    slot_type: SlotType,
    subjects: List[str],
    window: dict,
    next_occurrence: datetime,
    now: datetime,
    day_of_week: Optional[str] = None,
    specific_date: Optional[date] = None,
) -> List[Slot]:
    expiry = expiry_instant(next_occurrence, window["end"])
    return [
        Slot(
            id=new_slot_id(),
            slot_type=slot_type,
            day_of_week=day_of_week,
            specific_date=specific_date,
            start_time=window["start"],
            end_time=window["end"],
            subject=subject,
            status=SlotStatus.available,
            next_occurrence=next_occurrence,
            expiry_date=expiry,
            created_at=now,
        )
        for subject in subjects
    ]


def create_recurring_slots(
    day_of_week: str,
    time_slot_id: str,
    subjects: Iterable[str],
    now: Optional[datetime] = None,
) -> List[Slot]:
    now = now or datetime.now()
    subjects = _clean_subjects(subjects)
    window = _time_window(time_slot_id)

    if day_of_week not in ELIGIBLE_DAYS:
        raise ValidationError(f"Tutoring is only offered {ELIGIBLE_DAYS[0]} through {ELIGIBLE_DAYS[-1]}")

    next_occurrence = next_occurrence_of(day_of_week, window["start"], now)
    return _build(
        SlotType.recurring, subjects, window, next_occurrence, now, day_of_week=day_of_week
    )


def create_specific_date_slots(
    on_date: date,
    time_slot_id: str,
    subjects: Iterable[str],
    now: Optional[datetime] = None,
) -> List[Slot]:
    now = now or datetime.now()
    subjects = _clean_subjects(subjects)
    window = _time_window(time_slot_id)

    if on_date is None:
        raise ValidationError("Please select a date")
    if weekday_name(on_date) not in ELIGIBLE_DAYS:
        raise ValidationError(f"Tutoring is only offered {ELIGIBLE_DAYS[0]} through {ELIGIBLE_DAYS[-1]}")

    start = combine(on_date, window["start"])
    if start <= now:
        raise ValidationError("Slot date and time must be in the future")

    return _build(
        SlotType.specific_date, subjects, window, start, now, specific_date=on_date
    )


def create_slots(request: SlotCreate, now: Optional[datetime] = None) -> List[Slot]:
    if request.slot_type == SlotType.recurring:
        if not request.day_of_week:
            raise ValidationError("Please select a day of the week")
        return create_recurring_slots(request.day_of_week, request.time_slot_id, request.subjects, now)
    return create_specific_date_slots(request.specific_date, request.time_slot_id, request.subjects, now)


def add_slots(store: TutorStore, tutor_id: str, slots: List[Slot]) -> TutorRecord:
    """Append slots to a tutor and index their subjects as tutor specialties."""

    def mutate(record: TutorRecord) -> TutorRecord:
        subjects = list(record.subjects)
        for slot in slots:
            if slot.subject not in subjects:
                subjects.append(slot.subject)
        return record.model_copy(update={"slots": record.slots + list(slots), "subjects": subjects})

    record, _ = store.modify(tutor_id, mutate, settings.booking_max_attempts)
    logger.info("Tutor %s added %d slot(s)", tutor_id, len(slots))
    return record


def remove_slot(
    store: TutorStore,
    tutor_id: str,
    slot_id: str,
    now: Optional[datetime] = None,
) -> Slot:
    now = now or datetime.now()
    removed = []

    def mutate(record: TutorRecord) -> TutorRecord:
        index = record.find_slot(slot_id)
        if index is None:
            raise NotFoundError(f"Slot {slot_id!r} not found")
        slot = record.slots[index]
        if slot.status == SlotStatus.booked and not is_expired(slot.expiry_date, now):
            raise ConflictError("Slot has an upcoming booking and cannot be removed")
        removed[:] = [slot]
        return record.model_copy(update={"slots": record.slots[:index] + record.slots[index + 1:]})

    store.modify(tutor_id, mutate, settings.booking_max_attempts)
    logger.info("Tutor %s removed slot %s", tutor_id, slot_id)
    return removed[0]


def update_profile(
    store: TutorStore,
    tutor_id: str,
    bio: Optional[str] = None,
    grade_level: Optional[str] = None,
    subjects: Optional[List[str]] = None,
) -> TutorRecord:
    changes = {}
    if bio is not None:
        changes["bio"] = bio
    if grade_level is not None:
        changes["grade_level"] = grade_level
    if subjects is not None:
        changes["subjects"] = _clean_subjects(subjects) if subjects else []

    def mutate(record: TutorRecord) -> Optional[TutorRecord]:
        if not changes:
            return None
        return record.model_copy(update=changes)

    record, _ = store.modify(tutor_id, mutate, settings.booking_max_attempts)
    return record
