# peertutor/store.py
# Tutor records, one row each. Every write is compare-and-swap on `version`.

import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .db import engine as default_engine
from .errors import ConflictError, NotFoundError, VersionConflict
from .models import Subject, Tutor
from .schemas import Slot, SubjectRecord, TutorRecord

logger = logging.getLogger(__name__)


def _to_record(row: Tutor) -> TutorRecord:
    return TutorRecord(
        id=row.id,
        name=row.name,
        bio=row.bio or "",
        grade_level=row.grade_level or "",
        is_admin=row.is_admin,
        subjects=list(row.subjects or []),
        slots=[Slot.model_validate(s) for s in (row.slots or [])],
        version=row.version,
        created_at=row.created_at,
    )


class TutorStore:
    def __init__(self, engine=None):
        self.engine = engine or default_engine

    # ---- tutors ----

    def get_tutor(self, tutor_id: str) -> TutorRecord:
        with Session(self.engine) as session:
            row = session.get(Tutor, tutor_id)
            if row is None:
                raise NotFoundError(f"Tutor {tutor_id!r} not found")
            return _to_record(row)

    def list_tutors(self) -> List[TutorRecord]:
        with Session(self.engine) as session:
            rows = session.exec(select(Tutor).order_by(Tutor.id)).all()
            return [_to_record(row) for row in rows]

    def list_tutor_ids(self) -> List[str]:
        with Session(self.engine) as session:
            return list(session.exec(select(Tutor.id).order_by(Tutor.id)).all())

    def put_tutor(self, record: TutorRecord, expected_version: int) -> TutorRecord:
        """Write the whole record if the stored version is still expected_version."""
        stmt = (
            update(Tutor)
            .where(Tutor.id == record.id)
            .where(Tutor.version == expected_version)
            .values(
                name=record.name,
                bio=record.bio,
                grade_level=record.grade_level,
                is_admin=record.is_admin,
                subjects=list(record.subjects),
                slots=[slot.model_dump(mode="json") for slot in record.slots],
                version=expected_version + 1,
            )
        )
        with self.engine.begin() as conn:
            result = conn.execute(stmt)
            updated = result.rowcount

        if updated == 0:
            if not self._exists(record.id):
                raise NotFoundError(f"Tutor {record.id!r} not found")
            logger.debug("Version conflict writing tutor %s (expected v%s)", record.id, expected_version)
            raise VersionConflict(record.id, expected_version)

        return record.model_copy(update={"version": expected_version + 1})

    def modify(
        self,
        tutor_id: str,
        mutate: Callable[[TutorRecord], Optional[TutorRecord]],
        max_attempts: int = 3,
    ) -> Tuple[TutorRecord, bool]:
        """
        Read-modify-write one tutor with compare-and-swap.

        ``mutate`` receives the freshly read record and returns the new record,
        or None when nothing needs to change. It may raise to abort. On a
        version conflict the whole sequence runs again from a new read, up to
        ``max_attempts`` times, after which ConflictError is raised.

        Returns (record, changed).
        """
        for attempt in range(1, max_attempts + 1):
            record = self.get_tutor(tutor_id)
            updated = mutate(record)
            if updated is None:
                return record, False
            try:
                return self.put_tutor(updated, expected_version=record.version), True
            except VersionConflict:
                logger.info(
                    "Tutor %s changed concurrently (attempt %d/%d)", tutor_id, attempt, max_attempts
                )
        raise ConflictError(f"Tutor {tutor_id!r} kept changing; gave up after {max_attempts} attempts")

    def create_tutor(
        self,
        tutor_id: str,
        name: str,
        password_hash: str,
        is_admin: bool = False,
    ) -> TutorRecord:
        row = Tutor(
            id=tutor_id,
            name=name,
            password_hash=password_hash,
            is_admin=is_admin,
            subjects=[],
            slots=[],
        )
        with Session(self.engine) as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ConflictError(f"Tutor {tutor_id!r} already exists")
            session.refresh(row)
            return _to_record(row)

    def get_password_hash(self, tutor_id: str) -> Optional[str]:
        with Session(self.engine) as session:
            row = session.get(Tutor, tutor_id)
            return row.password_hash if row is not None else None

    def _exists(self, tutor_id: str) -> bool:
        with Session(self.engine) as session:
            return session.get(Tutor, tutor_id) is not None

    # ---- subjects ----

    def list_subjects(self) -> List[SubjectRecord]:
        with Session(self.engine) as session:
            rows = session.exec(select(Subject).order_by(Subject.name)).all()
            return [SubjectRecord.model_validate(row, from_attributes=True) for row in rows]

    def put_subject(self, subject: SubjectRecord) -> SubjectRecord:
        """Create or update a subject keyed by its slug id."""
        with Session(self.engine) as session:
            row = session.get(Subject, subject.id)
            if row is None:
                row = Subject(
                    id=subject.id,
                    name=subject.name,
                    category=subject.category.value,
                    icon=subject.icon,
                    badge=subject.badge,
                )
                session.add(row)
            else:
                row.name = subject.name
                row.category = subject.category.value
                row.icon = subject.icon
                row.badge = subject.badge
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ConflictError(f"Subject {subject.name!r} already exists")
            session.refresh(row)
            return SubjectRecord.model_validate(row, from_attributes=True)


def get_store() -> TutorStore:
    return TutorStore()
