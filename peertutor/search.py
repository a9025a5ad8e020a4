# peertutor/search.py

from datetime import datetime, date
from typing import List, Optional

from .booking import is_bookable, occurrence_concluded
from .errors import ValidationError
from .rollover import roll_forward
from .schemas import SessionEntry, Slot, SlotStatus, SlotType, SubjectCategory, SubjectRecord, TutorListing
from .store import TutorStore
from .timeutils import to_24_hour, weekday_name


def _chronological(slot: Slot):
    # next_occurrence orders by calendar day first, then start time
    return slot.next_occurrence, to_24_hour(slot.start_time)


def effective_slot(slot: Slot, now: datetime) -> Optional[Slot]:
    """The slot as a student should see it, or None if it cannot be booked."""
    if not is_bookable(slot, now):
        return None
    if slot.slot_type == SlotType.recurring and occurrence_concluded(slot, now):
        return roll_forward(slot, now)
    return slot


def find_tutors_by_subject(
    store: TutorStore,
    subject_name: str,
    now: Optional[datetime] = None,
) -> List[TutorListing]:
    now = now or datetime.now()
    subject_name = (subject_name or "").strip()
    if not subject_name:
        raise ValidationError("Please select a subject")

    listings = []
    for tutor in store.list_tutors():
        if subject_name not in tutor.subjects:
            continue

        open_slots = []
        for slot in tutor.slots:
            if slot.subject != subject_name:
                continue
            shown = effective_slot(slot, now)
            if shown is not None:
                open_slots.append(shown)

        if not open_slots:
            continue

        listings.append(
            TutorListing(
                id=tutor.id,
                name=tutor.name,
                bio=tutor.bio,
                grade_level=tutor.grade_level,
                slots=sorted(open_slots, key=_chronological),
            )
        )

    listings.sort(key=lambda listing: listing.name.lower())
    return listings


def daily_roster(store: TutorStore, on_date: date) -> List[SessionEntry]:
    """Every slot, across all tutors, that falls on on_date."""
    day_name = weekday_name(on_date)

    roster = []
    for tutor in store.list_tutors():
        for slot in tutor.slots:
            if slot.slot_type == SlotType.specific_date:
                matches = slot.specific_date == on_date
            else:
                matches = slot.day_of_week == day_name
            if matches:
                roster.append(SessionEntry(tutor_id=tutor.id, tutor_name=tutor.name, slot=slot))

    roster.sort(key=lambda entry: (to_24_hour(entry.slot.start_time), entry.tutor_name.lower()))
    return roster


def booked_sessions(store: TutorStore, tutor_id: Optional[str] = None) -> List[SessionEntry]:
    tutors = [store.get_tutor(tutor_id)] if tutor_id is not None else store.list_tutors()

    sessions = [
        SessionEntry(tutor_id=tutor.id, tutor_name=tutor.name, slot=slot)
        for tutor in tutors
        for slot in tutor.slots
        if slot.status == SlotStatus.booked
    ]
    sessions.sort(key=lambda entry: _chronological(entry.slot))
    return sessions


def list_subjects(store: TutorStore, category: Optional[SubjectCategory] = None) -> List[SubjectRecord]:
    subjects = store.list_subjects()
    if category is not None:
        subjects = [s for s in subjects if s.category == category]
    return sorted(subjects, key=lambda s: s.name.lower())
