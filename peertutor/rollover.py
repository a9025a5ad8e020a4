# peertutor/rollover.py
# Periodic sweep: expire past one-off slots, move concluded recurring slots a week on.

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from .config import settings
from .errors import SchedulingError
from .schemas import Slot, SlotStatus, SlotType, SweepReport, TutorRecord
from .store import TutorStore
from .timeutils import expiry_instant, is_expired, next_occurrence_of

logger = logging.getLogger(__name__)

EXPIRED = "expired"
ROLLED = "rolled"


def roll_forward(slot: Slot, now: datetime) -> Slot:
    """Recurring slot moved to its next occurrence strictly after now, booking cleared."""
    occurrence = next_occurrence_of(slot.day_of_week, slot.start_time, now)
    if occurrence <= now:
        occurrence += timedelta(days=7)
    return slot.model_copy(
        update={
            "next_occurrence": occurrence,
            "expiry_date": expiry_instant(occurrence, slot.end_time),
            "status": SlotStatus.available,
            "student_name": None,
            "student_email": None,
        }
    )


def sweep_slot(slot: Slot, now: datetime) -> Tuple[Slot, Optional[str]]:
    if not is_expired(slot.expiry_date, now):
        return slot, None

    if slot.slot_type == SlotType.specific_date:
        if slot.status == SlotStatus.expired:
            return slot, None
        return slot.model_copy(update={"status": SlotStatus.expired}), EXPIRED

    return roll_forward(slot, now), ROLLED


def sweep_slots(slots: List[Slot], now: datetime) -> Tuple[List[Slot], dict]:
    """Pure sweep over one tutor's slots. Returns the new list and change counts."""
    counts = {EXPIRED: 0, ROLLED: 0}
    swept = []
    for slot in slots:
        new_slot, change = sweep_slot(slot, now)
        if change is not None:
            counts[change] += 1
            if change == ROLLED:
                logger.debug(
                    "Renewing recurring slot %s: %s (%s) -> %s",
                    slot.id, slot.subject, slot.day_of_week, new_slot.next_occurrence.isoformat(),
                )
        swept.append(new_slot)
    return swept, counts


def sweep_tutor(
    store: TutorStore,
    tutor_id: str,
    now: datetime,
    max_attempts: Optional[int] = None,
) -> dict:
    counts = {}

    def mutate(record: TutorRecord) -> Optional[TutorRecord]:
        swept, attempt_counts = sweep_slots(record.slots, now)
        counts.clear()
        counts.update(attempt_counts)
        if not any(attempt_counts.values()):
            return None
        return record.model_copy(update={"slots": swept})

    _, changed = store.modify(tutor_id, mutate, max_attempts or settings.sweep_max_attempts)
    if not changed:
        return {EXPIRED: 0, ROLLED: 0}
    return counts


def run_sweep(store: TutorStore, now: Optional[datetime] = None) -> SweepReport:
    now = now or datetime.now()
    logger.info("Running slot expiration check at %s", now.isoformat())

    report = SweepReport()
    for tutor_id in store.list_tutor_ids():
        report.tutors_scanned += 1
        try:
            counts = sweep_tutor(store, tutor_id, now)
        except SchedulingError as exc:
            logger.error("Sweep failed for tutor %s: %s", tutor_id, exc)
            report.failures[tutor_id] = str(exc)
            continue
        except Exception as exc:
            logger.exception("Unexpected sweep failure for tutor %s", tutor_id)
            report.failures[tutor_id] = str(exc)
            continue

        if counts[EXPIRED] or counts[ROLLED]:
            report.tutors_updated += 1
            report.slots_expired += counts[EXPIRED]
            report.slots_rolled += counts[ROLLED]

    logger.info(
        "Sweep done: %d tutor(s) updated, %d slot(s) expired, %d slot(s) rolled, %d failure(s)",
        report.tutors_updated, report.slots_expired, report.slots_rolled, len(report.failures),
    )
    return report
