import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shedula.auth.tokens import create_demo_token, create_doctor_token
from shedula.core import config
from shedula.core.clock import utc_timestamp
from shedula.core.schemas import ApiModel
from shedula.database import get_db
from shedula.models.doctor_user import DoctorUser
from shedula.models.user import User
from shedula.routes.doctor_portal_routes import DoctorUserResponse, empty_week
from shedula.routes.user_routes import UserResponse

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


def _normalize_email(value: str) -> str:
    normalized = value.strip()
    if '@' not in normalized:
        raise ValueError('Please enter a valid email address')
    return normalized


class LoginRequest(ApiModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class SignupRequest(ApiModel):
    name: str
    email: str
    password: str
    phone: str | None = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _normalize_email(value)


class DoctorSignupRequest(SignupRequest):
    specialty: str
    experience: str
    qualifications: list[str] | str = []
    consultation_fee: float | None = None
    bio: str | None = None

    @field_validator('qualifications')
    @classmethod
    def validate_qualifications(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str):
            return [value]
        return value


class UserSessionResponse(ApiModel):
    user: UserResponse
    token: str


class DoctorSessionResponse(ApiModel):
    doctor: DoctorUserResponse
    token: str


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable.',
        ) from exc


@router.post('/login', response_model=UserSessionResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    # Demo authentication: any password is accepted.
    user = db.query(User).filter(User.email == data.email).first()
    if user is None:
        user = User(
            id=str(uuid.uuid4()),
            name=data.email.split('@')[0],
            email=data.email,
            phone=config.DEFAULT_PHONE,
        )
        db.add(user)
        _commit(db)
        db.refresh(user)
        logger.info('Created demo user %s on first login', user.id)

    logger.info('User %s logged in', user.id)
    return UserSessionResponse(user=UserResponse.model_validate(user), token=create_demo_token())


@router.post('/signup', response_model=UserSessionResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    existing_user = db.query(User).filter(User.email == data.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='User already exists with this email',
        )

    user = User(
        id=str(uuid.uuid4()),
        name=data.name,
        email=data.email,
        phone=data.phone or config.DEFAULT_PHONE,
    )
    db.add(user)
    _commit(db)
    db.refresh(user)

    logger.info('Signed up user %s', user.id)
    return UserSessionResponse(user=UserResponse.model_validate(user), token=create_demo_token())


@router.post('/doctor/login', response_model=DoctorSessionResponse)
def doctor_login(data: LoginRequest, db: Session = Depends(get_db)):
    doctor = db.query(DoctorUser).filter(DoctorUser.email == data.email).first()
    if doctor is None:
        doctor = DoctorUser(
            id=str(uuid.uuid4()),
            name=data.email.split('@')[0],
            email=data.email,
            phone=config.DEFAULT_PHONE,
            specialty='General Physician',
            experience='5 years',
            rating=4.5,
            image=config.DEFAULT_DOCTOR_IMAGE,
            bio='Dedicated healthcare professional',
            qualifications=['MBBS'],
            clinic_address='Medical Center',
            consultation_fee=300,
            availability=[],
            is_verified=True,
            created_at=utc_timestamp(),
            total_patients=0,
            total_appointments=0,
        )
        db.add(doctor)
        _commit(db)
        db.refresh(doctor)
        logger.info('Created demo doctor %s on first login', doctor.id)

    logger.info('Doctor %s logged in', doctor.id)
    return DoctorSessionResponse(doctor=DoctorUserResponse.model_validate(doctor), token=create_doctor_token())


@router.post('/doctor/signup', response_model=DoctorSessionResponse, status_code=status.HTTP_201_CREATED)
def doctor_signup(data: DoctorSignupRequest, db: Session = Depends(get_db)):
    existing_doctor = db.query(DoctorUser).filter(DoctorUser.email == data.email).first()
    if existing_doctor:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Doctor already exists with this email',
        )

    doctor = DoctorUser(
        id=str(uuid.uuid4()),
        name=data.name,
        email=data.email,
        phone=data.phone or config.DEFAULT_PHONE,
        specialty=data.specialty,
        experience=data.experience,
        rating=4.0,
        image=config.DEFAULT_DOCTOR_IMAGE,
        bio=data.bio or '',
        qualifications=data.qualifications,
        clinic_address='',
        consultation_fee=data.consultation_fee or 0,
        availability=empty_week(),
        is_verified=False,
        created_at=utc_timestamp(),
        total_patients=0,
        total_appointments=0,
    )
    db.add(doctor)
    _commit(db)
    db.refresh(doctor)

    logger.info('Signed up doctor %s', doctor.id)
    return DoctorSessionResponse(doctor=DoctorUserResponse.model_validate(doctor), token=create_doctor_token())
