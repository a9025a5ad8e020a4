# peertutor/booking.py

import logging
from datetime import datetime
from typing import Optional

from .config import settings
from .errors import ConflictError, NotFoundError, ValidationError
from .rollover import roll_forward
from .schemas import BookingResult, Slot, SlotStatus, SlotType, TutorRecord
from .store import TutorStore
from .timeutils import expiry_instant, is_expired

logger = logging.getLogger(__name__)


def occurrence_concluded(slot: Slot, now: datetime) -> bool:
    return is_expired(slot.expiry_date, now)


def is_bookable(slot: Slot, now: datetime) -> bool:
    """
    Available and still upcoming, or a recurring slot whose last occurrence has
    ended (a concluded booking the sweep has not reset yet). A specific-date
    slot never comes back once its date has passed.
    """
    if slot.slot_type == SlotType.recurring and occurrence_concluded(slot, now):
        return True
    return slot.status == SlotStatus.available and not occurrence_concluded(slot, now)


def _live_occurrence(slot: Slot, now: datetime) -> Slot:
    if slot.slot_type == SlotType.recurring and (slot.expiry_date is None or occurrence_concluded(slot, now)):
        return roll_forward(slot, now)
    if slot.expiry_date is None:
        return slot.model_copy(update={"expiry_date": expiry_instant(slot.next_occurrence, slot.end_time)})
    return slot


def book_slot(
    store: TutorStore,
    tutor_id: str,
    slot_id: str,
    student_name: str,
    student_email: Optional[str] = None,
    now: Optional[datetime] = None,
) -> BookingResult:
    now = now or datetime.now()
    student_name = (student_name or "").strip()
    if not student_name:
        raise ValidationError("Student name is required")
    student_email = (student_email or "").strip() or None

    booked = []

    def mutate(record: TutorRecord) -> TutorRecord:
        # 1) Find the slot in the freshly read record
        index = record.find_slot(slot_id)
        if index is None:
            raise NotFoundError(f"Slot {slot_id!r} not found")

        # 2) Check it is effectively available
        slot = record.slots[index]
        if not is_bookable(slot, now):
            if slot.status == SlotStatus.expired or occurrence_concluded(slot, now):
                raise ConflictError("This slot has expired")
            raise ConflictError("This slot has already been booked by someone else")

        # 3) Mark only that slot Booked
        new_slot = _live_occurrence(slot, now).model_copy(
            update={
                "status": SlotStatus.booked,
                "student_name": student_name,
                "student_email": student_email,
            }
        )
        slots = list(record.slots)
        slots[index] = new_slot
        booked[:] = [new_slot]
        return record.model_copy(update={"slots": slots})

    # 4) Compare-and-swap write; a concurrent writer sends us back to 1)
    try:
        store.modify(tutor_id, mutate, settings.booking_max_attempts)
    except ConflictError as exc:
        logger.info("Booking of slot %s (tutor %s) refused: %s", slot_id, tutor_id, exc)
        raise

    slot = booked[0]
    logger.info(
        "Booked slot %s (tutor %s, %s %s) for %s",
        slot.id, tutor_id, slot.day_label, slot.time_label, student_name,
    )
    return BookingResult(tutor_id=tutor_id, slot=slot)
