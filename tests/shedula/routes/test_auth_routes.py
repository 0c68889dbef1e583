import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from shedula.models.doctor_user import DoctorUser
from shedula.models.user import User
from shedula.routes.auth_routes import (
    DoctorSignupRequest,
    LoginRequest,
    SignupRequest,
    doctor_login,
    doctor_signup,
    login,
    signup,
)


def test_login_request_rejects_email_without_at_sign() -> None:
    with pytest.raises(ValidationError):
        LoginRequest(email='not-an-email', password='secret')


def test_login_request_strips_whitespace() -> None:
    request = LoginRequest(email=' john@example.com ', password='anything')

    assert request.email == 'john@example.com'


def test_login_returns_existing_user_with_demo_token(shedula_db) -> None:
    session = login(data=LoginRequest(email='john@example.com', password='wrong'), db=shedula_db)

    assert session.user.id == 'user123'
    assert session.user.name == 'John Doe'
    assert session.token.startswith('demo-token-')
    assert session.token.removeprefix('demo-token-').isdigit()


def test_login_creates_user_for_unknown_email(shedula_db) -> None:
    session = login(data=LoginRequest(email='jane.roe@example.com', password='pw'), db=shedula_db)

    assert session.user.name == 'jane.roe'
    assert session.user.phone == '+1-555-0000'
    stored = shedula_db.query(User).filter(User.email == 'jane.roe@example.com').one()
    assert stored.id == session.user.id


def test_login_twice_returns_same_user(shedula_db) -> None:
    first = login(data=LoginRequest(email='repeat@example.com', password='pw'), db=shedula_db)
    second = login(data=LoginRequest(email='repeat@example.com', password='other'), db=shedula_db)

    assert first.user.id == second.user.id


def test_signup_creates_user(shedula_db) -> None:
    session = signup(
        data=SignupRequest(name='Ada', email='ada@example.com', password='Secret123', phone='+15551234'),
        db=shedula_db,
    )

    assert session.user.name == 'Ada'
    assert session.user.phone == '+15551234'
    assert session.token.startswith('demo-token-')


def test_signup_defaults_phone(shedula_db) -> None:
    session = signup(data=SignupRequest(name='Bo', email='bo@example.com', password='Secret123'), db=shedula_db)

    assert session.user.phone == '+1-555-0000'


def test_signup_rejects_duplicate_email(shedula_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        signup(data=SignupRequest(name='John', email='john@example.com', password='Secret123'), db=shedula_db)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'User already exists with this email'


def test_doctor_login_returns_existing_doctor(shedula_db) -> None:
    session = doctor_login(data=LoginRequest(email='doctor@example.com', password='pw'), db=shedula_db)

    assert session.doctor.id == 'doc1'
    assert session.doctor.availability[0].day == 'Monday'
    assert session.token.startswith('doctor-token-')


def test_doctor_login_creates_general_physician(shedula_db) -> None:
    session = doctor_login(data=LoginRequest(email='newdoc@clinic.com', password='pw'), db=shedula_db)

    assert session.doctor.name == 'newdoc'
    assert session.doctor.specialty == 'General Physician'
    assert session.doctor.consultation_fee == 300
    assert session.doctor.is_verified is True
    assert shedula_db.query(DoctorUser).filter(DoctorUser.email == 'newdoc@clinic.com').count() == 1


def test_doctor_signup_request_wraps_single_qualification() -> None:
    request = DoctorSignupRequest.model_validate({
        'name': 'Dr. Lee',
        'email': 'lee@clinic.com',
        'password': 'Secret123',
        'specialty': 'Dermatologist',
        'experience': '3 years',
        'qualifications': 'MBBS',
        'consultationFee': 250,
    })

    assert request.qualifications == ['MBBS']
    assert request.consultation_fee == 250


def test_doctor_signup_starts_with_closed_week(shedula_db) -> None:
    session = doctor_signup(
        data=DoctorSignupRequest(
            name='Dr. Lee',
            email='lee@clinic.com',
            password='Secret123',
            specialty='Dermatologist',
            experience='3 years',
            qualifications=['MBBS', 'MD'],
        ),
        db=shedula_db,
    )

    doctor = session.doctor
    assert doctor.rating == 4.0
    assert doctor.is_verified is False
    assert doctor.consultation_fee == 0
    assert doctor.qualifications == ['MBBS', 'MD']
    assert [day.day for day in doctor.availability] == [
        'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday',
    ]
    assert not any(day.is_available for day in doctor.availability)
    assert session.token.startswith('doctor-token-')


def test_doctor_signup_rejects_duplicate_email(shedula_db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        doctor_signup(
            data=DoctorSignupRequest(
                name='Dr. Sarah Johnson',
                email='doctor@example.com',
                password='Secret123',
                specialty='Cardiologist',
                experience='10 years',
            ),
            db=shedula_db,
        )

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Doctor already exists with this email'
