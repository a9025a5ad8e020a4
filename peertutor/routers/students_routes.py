# peertutor/routers/students_routes.py
# Students do not log in; they search by subject and book with their name.

from typing import List, Optional

from fastapi import APIRouter, Depends

from peertutor.booking import book_slot
from peertutor.deps import http_error
from peertutor.errors import SchedulingError
from peertutor.schemas import BookingCreate, BookingResult, SubjectCategory, SubjectRecord, TutorListing
from peertutor.search import find_tutors_by_subject, list_subjects
from peertutor.store import TutorStore, get_store

router = APIRouter(
    tags=["students"],
)


@router.get("/subjects", response_model=List[SubjectRecord])
def get_subjects(
    category: Optional[SubjectCategory] = None,
    store: TutorStore = Depends(get_store),
):
    return list_subjects(store, category)


@router.get("/subjects/{subject_name}/tutors", response_model=List[TutorListing])
def get_tutors_for_subject(
    subject_name: str,
    store: TutorStore = Depends(get_store),
):
    try:
        return find_tutors_by_subject(store, subject_name)
    except SchedulingError as exc:
        raise http_error(exc)


@router.post("/tutors/{tutor_id}/slots/{slot_id}/book", response_model=BookingResult)
def book(
    tutor_id: str,
    slot_id: str,
    booking: BookingCreate,
    store: TutorStore = Depends(get_store),
):
    try:
        return book_slot(
            store,
            tutor_id,
            slot_id,
            student_name=booking.student_name,
            student_email=booking.student_email,
        )
    except SchedulingError as exc:
        raise http_error(exc)
