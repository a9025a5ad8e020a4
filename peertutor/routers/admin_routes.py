# peertutor/routers/admin_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends

from peertutor.auth import hash_password
from peertutor.deps import http_error, require_admin
from peertutor.errors import SchedulingError
from peertutor.rollover import run_sweep
from peertutor.schemas import (
    CurrentTutor,
    SessionEntry,
    SubjectCreate,
    SubjectRecord,
    SweepReport,
    TutorCreate,
    TutorPublic,
)
from peertutor.search import booked_sessions, daily_roster
from peertutor.store import TutorStore, get_store
from peertutor.subjects import add_subject

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
)


@router.post("/tutors", response_model=TutorPublic, status_code=201)
def create_tutor(
    tutor: TutorCreate,
    store: TutorStore = Depends(get_store),
    admin: CurrentTutor = Depends(require_admin),
):
    try:
        record = store.create_tutor(
            tutor.id,
            name=tutor.name or tutor.id,
            password_hash=hash_password(tutor.password),
            is_admin=tutor.is_admin,
        )
    except SchedulingError as exc:
        raise http_error(exc)
    return record.model_dump(include=set(TutorPublic.model_fields))


@router.post("/subjects", response_model=SubjectRecord, status_code=201)
def create_subject(
    subject: SubjectCreate,
    store: TutorStore = Depends(get_store),
    admin: CurrentTutor = Depends(require_admin),
):
    try:
        return add_subject(store, subject.name, subject.category, subject.icon, subject.badge)
    except SchedulingError as exc:
        raise http_error(exc)


@router.get("/roster", response_model=List[SessionEntry])
def get_roster(
    on_date: Optional[date] = None,
    store: TutorStore = Depends(get_store),
    admin: CurrentTutor = Depends(require_admin),
):
    return daily_roster(store, on_date or date.today())


@router.get("/bookings", response_model=List[SessionEntry])
def get_all_bookings(
    store: TutorStore = Depends(get_store),
    admin: CurrentTutor = Depends(require_admin),
):
    return booked_sessions(store)


@router.post("/rollover", response_model=SweepReport)
def rollover(
    store: TutorStore = Depends(get_store),
    admin: CurrentTutor = Depends(require_admin),
):
    return run_sweep(store)
