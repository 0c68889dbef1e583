import asyncio
from contextlib import nullcontext

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import sessionmaker

from shedula import database, main
from shedula.core import config
from shedula.database import Base, build_engine, get_db, session_guard
from shedula.models.appointment import Appointment
from shedula.models.doctor import Doctor
from shedula.routes.appointment_routes import BookAppointmentRequest, book_appointment, claim_slot, find_slot
from shedula.seed import seed_demo_data


@pytest.fixture
def memory_sessions(monkeypatch: pytest.MonkeyPatch):
    engine = build_engine('sqlite://')
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    monkeypatch.setattr(config, 'DATABASE_URL', 'sqlite://')
    monkeypatch.setattr(database, 'SessionLocal', testing_session_local)
    monkeypatch.setattr(database, '_memory_session_lock', asyncio.Lock())
    try:
        yield testing_session_local
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_session_guard_is_shared_lock_for_memory_database(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'DATABASE_URL', 'sqlite:///:memory:')

    assert session_guard() is database._memory_session_lock


def test_session_guard_is_noop_for_file_database(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'DATABASE_URL', 'sqlite:///./shedula.db')

    assert isinstance(session_guard(), nullcontext)


def test_rejected_booking_cannot_undo_pending_claim_on_memory_database(memory_sessions) -> None:
    seed_db = memory_sessions()
    seed_demo_data(seed_db)
    seed_db.close()

    async def scenario():
        first = get_db()
        db_a = await first.__anext__()
        slot = find_slot('3', '2025-01-29', '02:00 PM', db_a)
        assert claim_slot(slot, db_a)

        second = get_db()
        waiting = asyncio.create_task(second.__anext__())
        await asyncio.sleep(0.05)
        assert not waiting.done()

        db_a.add(Appointment(
            id='race-a',
            doctor_id='3',
            doctor_name='Dr. Shivani Patel',
            specialty='Pediatrician',
            date='2025-01-29',
            time='02:00 PM',
            status='upcoming',
            type='Consultation',
            patient_id='user123',
        ))
        db_a.commit()
        await first.aclose()

        db_b = await asyncio.wait_for(waiting, timeout=1)
        try:
            with pytest.raises(HTTPException) as exception_info:
                book_appointment(
                    BookAppointmentRequest(
                        doctor_id='3',
                        date='2025-01-29',
                        time='02:00 PM',
                        patient_id='user456',
                    ),
                    db=db_b,
                )

            assert exception_info.value.status_code == 400
            assert exception_info.value.detail == 'Slot not available'
        finally:
            await second.aclose()

    asyncio.run(scenario())

    check_db = memory_sessions()
    try:
        slot = find_slot('3', '2025-01-29', '02:00 PM', check_db)
        assert slot.available is False
        assert check_db.query(Appointment).filter(Appointment.id == 'race-a').first() is not None
    finally:
        check_db.close()


def test_seed_demo_data_skips_populated_database(shedula_db) -> None:
    assert seed_demo_data(shedula_db) is False
    assert shedula_db.query(Doctor).count() == 4


@pytest.mark.parametrize('seed_enabled, expected_doctors', [(True, 4), (False, 0)])
def test_startup_seeds_only_when_enabled(
    monkeypatch: pytest.MonkeyPatch, seed_enabled: bool, expected_doctors: int
) -> None:
    engine = build_engine('sqlite://')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    monkeypatch.setattr(main, 'engine', engine)
    monkeypatch.setattr(main, 'SessionLocal', testing_session_local)
    monkeypatch.setattr(config, 'SEED_DEMO_DATA', seed_enabled)

    main.initialize_database()

    db = testing_session_local()
    try:
        assert db.query(Doctor).count() == expected_doctors
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
