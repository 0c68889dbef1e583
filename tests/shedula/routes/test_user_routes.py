import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from shedula.routes.appointment_routes import (
    UpdateAppointmentStatusRequest,
    update_appointment_status,
)
from shedula.routes.auth_routes import SignupRequest, signup
from shedula.routes.stats_routes import get_stats
from shedula.routes.user_routes import UpdateUserRequest, get_user_profile, update_user_profile


def test_get_user_profile(shedula_db) -> None:
    user = get_user_profile(user_id='user123', db=shedula_db)

    assert user.email == 'john@example.com'


def test_get_user_profile_returns_not_found(shedula_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_user_profile(user_id='nobody', db=shedula_db)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'User not found'


def test_update_user_profile_merges_fields(shedula_db) -> None:
    user = update_user_profile(
        user_id='user123',
        data=UpdateUserRequest(phone='+1-555-9999'),
        db=shedula_db,
    )

    assert user.phone == '+1-555-9999'
    assert user.name == 'John Doe'


def test_update_user_profile_returns_not_found(shedula_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        update_user_profile(user_id='nobody', data=UpdateUserRequest(name='X'), db=shedula_db)

    assert exception_info.value.status_code == 404


def test_update_user_profile_rejects_email_of_another_user(shedula_db) -> None:
    signup(SignupRequest(name='Ada', email='a@example.com', password='Secret123'), db=shedula_db)

    with pytest.raises(HTTPException) as exception_info:
        update_user_profile(user_id='user123', data=UpdateUserRequest(email='a@example.com'), db=shedula_db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'User already exists with this email'
    assert get_user_profile(user_id='user123', db=shedula_db).email == 'john@example.com'


def test_update_user_profile_accepts_own_email(shedula_db) -> None:
    user = update_user_profile(
        user_id='user123',
        data=UpdateUserRequest(email='john@example.com', name='Johnny'),
        db=shedula_db,
    )

    assert user.email == 'john@example.com'
    assert user.name == 'Johnny'


def test_update_user_profile_returns_unavailable_when_commit_fails(
    shedula_db, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_commit() -> None:
        raise OperationalError('COMMIT', {}, Exception('disk I/O error'))

    monkeypatch.setattr(shedula_db, 'commit', failing_commit)

    with pytest.raises(HTTPException) as exception_info:
        update_user_profile(user_id='user123', data=UpdateUserRequest(name='Johnny'), db=shedula_db)

    assert exception_info.value.status_code == 503
    assert exception_info.value.detail == 'Database unavailable.'
    monkeypatch.undo()
    assert get_user_profile(user_id='user123', db=shedula_db).name == 'John Doe'


def test_get_stats_counts_appointments_by_status(shedula_db) -> None:
    update_appointment_status(
        appointment_id='1',
        data=UpdateAppointmentStatusRequest(status='cancelled'),
        db=shedula_db,
    )

    stats = get_stats(db=shedula_db)

    assert stats.total_appointments == 2
    assert stats.upcoming_appointments == 0
    assert stats.completed_appointments == 1
    assert stats.cancelled_appointments == 1
    assert stats.total_doctors == 4
