from datetime import datetime, date, timedelta

import pytest

from peertutor.booking import book_slot
from peertutor.errors import VersionConflict
from peertutor.rollover import run_sweep, sweep_slot, sweep_slots
from peertutor.schemas import SlotStatus
from peertutor.slots import add_slots, create_recurring_slots, create_specific_date_slots
from peertutor.store import TutorStore

AFTER_MONDAY_SESSION = datetime(2026, 10, 19, 8, 0)


def _booked(slot, name="Jane Doe"):
    return slot.model_copy(update={"status": SlotStatus.booked, "student_name": name, "student_email": "jane@example.com"})


def test_live_slots_untouched(now):
    slot, = create_recurring_slots("Monday", "morning", ["APUSH"], now)
    assert sweep_slot(slot, now) == (slot, None)
    assert sweep_slot(slot.model_copy(update={"expiry_date": None}), AFTER_MONDAY_SESSION)[1] is None


def test_specific_date_expires_and_nothing_else_changes(now):
    slot, = create_specific_date_slots(date(2026, 10, 19), "morning", ["APUSH"], now)
    slot = _booked(slot)

    swept, change = sweep_slot(slot, AFTER_MONDAY_SESSION)

    assert change == "expired"
    assert swept.status == SlotStatus.expired
    assert swept.model_dump(exclude={"status"}) == slot.model_dump(exclude={"status"})


def test_specific_date_expired_is_terminal(now):
    slot, = create_specific_date_slots(date(2026, 10, 19), "morning", ["APUSH"], now)
    expired, _ = sweep_slot(slot, AFTER_MONDAY_SESSION)

    again, change = sweep_slot(expired, AFTER_MONDAY_SESSION + timedelta(days=30))
    assert change is None
    assert again.status == SlotStatus.expired


def test_recurring_booked_rolls_forward(now):
    slot, = create_recurring_slots("Monday", "morning", ["APUSH"], now)
    slot = _booked(slot)

    swept, change = sweep_slot(slot, AFTER_MONDAY_SESSION)

    assert change == "rolled"
    assert swept.id == slot.id
    assert swept.status == SlotStatus.available
    assert swept.student_name is None
    assert swept.student_email is None
    assert swept.next_occurrence > slot.next_occurrence
    assert swept.next_occurrence == slot.next_occurrence + timedelta(days=7)
    assert swept.expiry_date == datetime(2026, 10, 26, 7, 45)


def test_recurring_rolls_past_missed_weeks(now):
    slot, = create_recurring_slots("Monday", "morning", ["APUSH"], now)
    much_later = datetime(2026, 11, 11, 12, 0)  # a Wednesday, three weeks on

    swept, _ = sweep_slot(slot, much_later)

    assert swept.next_occurrence == datetime(2026, 11, 16, 7, 0)
    assert swept.next_occurrence > much_later


def test_sweep_slots_counts(now):
    recurring = create_recurring_slots("Monday", "morning", ["APUSH", "Civics EOC"], now)
    one_off = create_specific_date_slots(date(2026, 10, 19), "morning", ["APUSH"], now)
    later = create_recurring_slots("Tuesday", "morning", ["APUSH"], now)

    swept, counts = sweep_slots(recurring + one_off + later, AFTER_MONDAY_SESSION)

    assert counts == {"expired": 1, "rolled": 2}
    assert swept[-1] == later[0]


def test_run_sweep_writes_only_changed_tutors(store, tutor, now):
    other = store.create_tutor("rene", name="Rene", password_hash="x")
    add_slots(store, tutor.id, create_recurring_slots("Monday", "morning", ["APUSH"], now))
    add_slots(store, other.id, create_recurring_slots("Tuesday", "morning", ["APUSH"], now))
    versions = {t.id: t.version for t in store.list_tutors()}

    report = run_sweep(store, AFTER_MONDAY_SESSION)

    assert report.tutors_scanned == 2
    assert report.tutors_updated == 1
    assert report.slots_rolled == 1
    assert report.failures == {}
    assert store.get_tutor(tutor.id).version == versions[tutor.id] + 1
    assert store.get_tutor(other.id).version == versions[other.id]


def test_run_sweep_isolates_failures(store, tutor, now):
    class FlakyStore(TutorStore):
        def put_tutor(self, record, expected_version):
            if record.id == "broken":
                raise RuntimeError("disk on fire")
            return super().put_tutor(record, expected_version)

    broken = store.create_tutor("broken", name="Broken", password_hash="x")
    add_slots(store, broken.id, create_recurring_slots("Monday", "morning", ["APUSH"], now))
    add_slots(store, tutor.id, create_recurring_slots("Monday", "morning", ["APUSH"], now))

    report = run_sweep(FlakyStore(store.engine), AFTER_MONDAY_SESSION)

    assert set(report.failures) == {"broken"}
    assert report.tutors_updated == 1
    assert store.get_tutor(tutor.id).slots[0].next_occurrence == datetime(2026, 10, 26, 7, 0)
    assert store.get_tutor(broken.id).slots[0].next_occurrence == datetime(2026, 10, 19, 7, 0)


def test_sweep_retries_when_a_booking_lands_mid_sweep(store, tutor, now):
    expired_slot, = create_recurring_slots("Monday", "morning", ["APUSH"], now)
    tuesday_slot, = create_recurring_slots("Tuesday", "morning", ["APUSH"], now)
    add_slots(store, tutor.id, [expired_slot, tuesday_slot])

    class RacingStore(TutorStore):
        raced = False

        def put_tutor(self, record, expected_version):
            if not RacingStore.raced:
                RacingStore.raced = True
                # a student books the Tuesday slot between the sweep's read and write
                book_slot(TutorStore(self.engine), tutor.id, tuesday_slot.id, "John Roe", now=AFTER_MONDAY_SESSION)
            return super().put_tutor(record, expected_version)

    report = run_sweep(RacingStore(store.engine), AFTER_MONDAY_SESSION)

    assert report.failures == {}
    slots = {s.id: s for s in store.get_tutor(tutor.id).slots}
    assert slots[tuesday_slot.id].status == SlotStatus.booked
    assert slots[tuesday_slot.id].student_name == "John Roe"
    assert slots[expired_slot.id].next_occurrence == datetime(2026, 10, 26, 7, 0)


def test_version_conflict_is_raised_on_stale_write(store, tutor):
    store.put_tutor(tutor.model_copy(update={"bio": "first"}), expected_version=tutor.version)
    with pytest.raises(VersionConflict) as excinfo:
        store.put_tutor(tutor.model_copy(update={"bio": "second"}), expected_version=tutor.version)
    assert excinfo.value.tutor_id == tutor.id
    assert store.get_tutor(tutor.id).bio == "first"
