# peertutor/routers/tutors_routes.py

from typing import List

from fastapi import APIRouter, Depends

from peertutor.auth import get_current_tutor
from peertutor.deps import http_error
from peertutor.errors import SchedulingError
from peertutor.schemas import CurrentTutor, ProfileUpdate, SessionEntry, Slot, SlotCreate, TutorPublic
from peertutor.search import booked_sessions
from peertutor.slots import add_slots, create_slots, remove_slot, update_profile
from peertutor.store import TutorStore, get_store

router = APIRouter(
    prefix="/tutors",
    tags=["tutors"],
)


def _public(record) -> dict:
    return record.model_dump(include=set(TutorPublic.model_fields))


@router.get("/me", response_model=TutorPublic)
def get_me(
    store: TutorStore = Depends(get_store),
    current_tutor: CurrentTutor = Depends(get_current_tutor),
):
    try:
        return _public(store.get_tutor(current_tutor.id))
    except SchedulingError as exc:
        raise http_error(exc)


@router.put("/me/profile", response_model=TutorPublic)
def put_profile(
    profile: ProfileUpdate,
    store: TutorStore = Depends(get_store),
    current_tutor: CurrentTutor = Depends(get_current_tutor),
):
    try:
        record = update_profile(
            store,
            current_tutor.id,
            bio=profile.bio,
            grade_level=profile.grade_level,
            subjects=profile.subjects,
        )
    except SchedulingError as exc:
        raise http_error(exc)
    return _public(record)


@router.post("/me/slots", response_model=List[Slot], status_code=201)
def create_my_slots(
    request: SlotCreate,
    store: TutorStore = Depends(get_store),
    current_tutor: CurrentTutor = Depends(get_current_tutor),
):
    try:
        new_slots = create_slots(request)
        add_slots(store, current_tutor.id, new_slots)
    except SchedulingError as exc:
        raise http_error(exc)
    return new_slots


@router.delete("/me/slots/{slot_id}", response_model=Slot)
def delete_my_slot(
    slot_id: str,
    store: TutorStore = Depends(get_store),
    current_tutor: CurrentTutor = Depends(get_current_tutor),
):
    try:
        return remove_slot(store, current_tutor.id, slot_id)
    except SchedulingError as exc:
        raise http_error(exc)


@router.get("/me/bookings", response_model=List[SessionEntry])
def list_my_bookings(
    store: TutorStore = Depends(get_store),
    current_tutor: CurrentTutor = Depends(get_current_tutor),
):
    try:
        return booked_sessions(store, current_tutor.id)
    except SchedulingError as exc:
        raise http_error(exc)
