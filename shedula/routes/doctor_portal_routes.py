import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shedula.core.clock import utc_timestamp, utc_today
from shedula.core.schemas import ApiModel, MessageResponse
from shedula.database import get_db
from shedula.models.doctor_appointment import DoctorAppointment
from shedula.models.doctor_user import DoctorUser
from shedula.models.patient import Patient

router = APIRouter(tags=['doctor portal'])

logger = logging.getLogger(__name__)

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


class TimeSlotEntry(ApiModel):
    time: str
    is_available: bool


class DaySchedule(ApiModel):
    day: str
    is_available: bool
    time_slots: list[TimeSlotEntry] = []


class DoctorUserResponse(ApiModel):
    id: str
    name: str
    email: str
    phone: str
    specialty: str
    experience: str
    rating: float
    image: str
    bio: str = ''
    qualifications: list[str] = []
    clinic_address: str = ''
    consultation_fee: float = 0
    availability: list[DaySchedule] = []
    is_verified: bool
    created_at: str
    total_patients: int = 0
    total_appointments: int = 0


class UpdateDoctorProfileRequest(ApiModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    specialty: str | None = None
    experience: str | None = None
    image: str | None = None
    bio: str | None = None
    qualifications: list[str] | None = None
    clinic_address: str | None = None
    consultation_fee: float | None = None


class DoctorAppointmentResponse(ApiModel):
    id: str
    doctor_id: str | None = None
    patient_id: str
    patient_name: str
    patient_phone: str
    patient_email: str
    date: str
    time: str
    status: str
    type: str
    notes: str = ''
    symptoms: str = ''
    prescription: str = ''
    created_at: str
    updated_at: str


class UpdateDoctorAppointmentRequest(ApiModel):
    status: str
    notes: str | None = None


class RescheduleRequest(ApiModel):
    new_date: str
    new_time: str
    reason: str | None = None


class PrescriptionRequest(ApiModel):
    prescription: str
    notes: str | None = None


class PatientResponse(ApiModel):
    id: str
    name: str
    email: str
    phone: str
    age: int | None = None
    gender: str | None = None
    address: str | None = None
    medical_history: list[str] = []
    last_visit: str | None = None
    total_appointments: int = 0


class PatientDetailResponse(PatientResponse):
    appointments: list[DoctorAppointmentResponse] = []


class UpdateAvailabilityRequest(ApiModel):
    availability: list[DaySchedule]


class DoctorStatsResponse(ApiModel):
    total_appointments: int
    pending_appointments: int
    confirmed_appointments: int
    completed_appointments: int
    cancelled_appointments: int
    total_patients: int
    today_appointments: int
    monthly_revenue: float
    average_rating: float


def empty_week() -> list[dict]:
    return [
        DaySchedule(day=day, is_available=False, time_slots=[]).model_dump(by_alias=True)
        for day in WEEKDAYS
    ]


def get_doctor_user_or_404(doctor_id: str, db: Session) -> DoctorUser:
    doctor = db.query(DoctorUser).filter(DoctorUser.id == doctor_id).first()
    if doctor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Doctor not found',
        )
    return doctor


def get_doctor_appointment_or_404(appointment_id: str, db: Session) -> DoctorAppointment:
    appointment = db.query(DoctorAppointment).filter(DoctorAppointment.id == appointment_id).first()
    if appointment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Appointment not found',
        )
    return appointment


def list_practice_appointments(db: Session, appointment_status: str | None = None) -> list[DoctorAppointment]:
    """Every doctor appointment; the demo practice keeps a single shared schedule."""
    query = db.query(DoctorAppointment)
    if appointment_status:
        query = query.filter(DoctorAppointment.status == appointment_status)
    return query.order_by(DoctorAppointment.created_at.asc()).all()


def save(db: Session, instance) -> None:
    try:
        db.commit()
        db.refresh(instance)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable.',
        ) from exc


@router.get('/profile/{doctor_id}', response_model=DoctorUserResponse)
def get_doctor_profile(doctor_id: str, db: Session = Depends(get_db)):
    return get_doctor_user_or_404(doctor_id, db)


@router.put('/profile/{doctor_id}', response_model=DoctorUserResponse)
def update_doctor_profile(
    doctor_id: str,
    data: UpdateDoctorProfileRequest,
    db: Session = Depends(get_db),
):
    doctor = get_doctor_user_or_404(doctor_id, db)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if 'email' in changes and changes['email'] != doctor.email:
        taken = db.query(DoctorUser).filter(
            DoctorUser.email == changes['email'],
            DoctorUser.id != doctor.id,
        ).first()
        if taken:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Doctor already exists with this email',
            )

    for field, value in changes.items():
        setattr(doctor, field, value)
    save(db, doctor)

    return doctor


@router.get('/appointments/{doctor_id}', response_model=list[DoctorAppointmentResponse])
def list_doctor_appointments(
    doctor_id: str,
    appointment_status: str | None = Query(default=None, alias='status'),
    db: Session = Depends(get_db),
):
    del doctor_id
    return list_practice_appointments(db, appointment_status)


@router.put('/appointments/{appointment_id}', response_model=DoctorAppointmentResponse)
def update_doctor_appointment(
    appointment_id: str,
    data: UpdateDoctorAppointmentRequest,
    db: Session = Depends(get_db),
):
    appointment = get_doctor_appointment_or_404(appointment_id, db)

    appointment.status = data.status
    appointment.notes = data.notes or appointment.notes
    appointment.updated_at = utc_timestamp()
    save(db, appointment)

    logger.info('Doctor appointment %s set to %s', appointment.id, appointment.status)
    return appointment


@router.put('/appointments/{appointment_id}/reschedule', response_model=DoctorAppointmentResponse)
def reschedule_doctor_appointment(
    appointment_id: str,
    data: RescheduleRequest,
    db: Session = Depends(get_db),
):
    appointment = get_doctor_appointment_or_404(appointment_id, db)

    appointment.date = data.new_date
    appointment.time = data.new_time
    appointment.status = 'rescheduled'
    appointment.notes = f"Rescheduled: {data.reason or 'No reason provided'}"
    appointment.updated_at = utc_timestamp()
    save(db, appointment)

    logger.info('Doctor appointment %s moved to %s %s', appointment.id, data.new_date, data.new_time)
    return appointment


@router.put('/appointments/{appointment_id}/prescription', response_model=DoctorAppointmentResponse)
def write_prescription(
    appointment_id: str,
    data: PrescriptionRequest,
    db: Session = Depends(get_db),
):
    appointment = get_doctor_appointment_or_404(appointment_id, db)

    appointment.prescription = data.prescription
    appointment.notes = data.notes or appointment.notes
    appointment.updated_at = utc_timestamp()
    save(db, appointment)

    return appointment


@router.get('/patients/{doctor_id}', response_model=list[PatientResponse])
def list_doctor_patients(doctor_id: str, db: Session = Depends(get_db)):
    del doctor_id
    return db.query(Patient).order_by(Patient.name.asc()).all()


@router.get('/patient/{patient_id}', response_model=PatientDetailResponse)
def get_patient_detail(
    patient_id: str,
    doctor_id: str | None = Query(default=None, alias='doctorId'),
    db: Session = Depends(get_db),
):
    del doctor_id
    patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if patient is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Patient not found',
        )

    appointments = db.query(DoctorAppointment).filter(
        DoctorAppointment.patient_id == patient_id,
    ).order_by(DoctorAppointment.created_at.asc()).all()

    detail = PatientDetailResponse.model_validate(patient)
    detail.appointments = [DoctorAppointmentResponse.model_validate(appointment) for appointment in appointments]
    return detail


@router.put('/availability/{doctor_id}', response_model=MessageResponse)
def update_doctor_availability(
    doctor_id: str,
    data: UpdateAvailabilityRequest,
    db: Session = Depends(get_db),
):
    doctor = get_doctor_user_or_404(doctor_id, db)

    doctor.availability = [day.model_dump(by_alias=True) for day in data.availability]
    save(db, doctor)

    logger.info('Updated weekly availability for doctor %s', doctor.id)
    return MessageResponse(message='Availability updated successfully')


@router.get('/stats/{doctor_id}', response_model=DoctorStatsResponse)
def get_doctor_stats(doctor_id: str, db: Session = Depends(get_db)):
    doctor = get_doctor_user_or_404(doctor_id, db)

    appointments = list_practice_appointments(db)
    today = utc_today()

    def count(wanted: str) -> int:
        return sum(1 for appointment in appointments if appointment.status == wanted)

    completed = count('completed')
    return DoctorStatsResponse(
        total_appointments=len(appointments),
        pending_appointments=count('pending'),
        confirmed_appointments=count('confirmed'),
        completed_appointments=completed,
        cancelled_appointments=count('cancelled'),
        total_patients=doctor.total_patients or 0,
        today_appointments=sum(1 for appointment in appointments if appointment.date == today),
        monthly_revenue=(doctor.consultation_fee or 0) * completed,
        average_rating=doctor.rating or 0,
    )
