import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shedula.core import config
from shedula.core.clock import utc_timestamp
from shedula.core.schemas import ApiModel, MessageResponse
from shedula.database import get_db
from shedula.models.appointment import Appointment
from shedula.models.doctor import Doctor, DoctorSlot
from shedula.models.doctor_appointment import DoctorAppointment
from shedula.models.patient import Patient
from shedula.models.user import User
from shedula.routes.doctor_routes import get_doctor_or_404

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)

UNKNOWN_PATIENT_NAME = 'Unknown Patient'
UNKNOWN_PATIENT_EMAIL = 'unknown@example.com'


class BookAppointmentRequest(ApiModel):
    doctor_id: str
    date: str
    time: str
    patient_id: str
    type: str = 'Consultation'
    symptoms: str = ''
    notes: str = ''


class UpdateAppointmentStatusRequest(ApiModel):
    status: str


class AppointmentResponse(ApiModel):
    id: str
    doctor_id: str | None = None
    doctor_name: str
    specialty: str
    date: str
    time: str
    status: str
    type: str
    patient_id: str


def find_slot(doctor_id: str, slot_date: str, slot_time: str, db: Session) -> DoctorSlot | None:
    return db.query(DoctorSlot).filter(
        DoctorSlot.doctor_id == doctor_id,
        DoctorSlot.date == slot_date,
        DoctorSlot.time == slot_time,
    ).order_by(DoctorSlot.id.asc()).first()


def claim_slot(slot: DoctorSlot, db: Session) -> bool:
    """Flip an open slot to booked. False when another booking got there first."""
    claimed = db.query(DoctorSlot).filter(
        DoctorSlot.id == slot.id,
        DoctorSlot.available.is_(True),
    ).update({DoctorSlot.available: False})
    return claimed == 1


def release_slot(appointment: Appointment, db: Session) -> bool:
    if appointment.doctor_id:
        doctor = db.query(Doctor).filter(Doctor.id == appointment.doctor_id).first()
    else:
        doctor = db.query(Doctor).filter(Doctor.name == appointment.doctor_name).first()

    if doctor is None:
        return False

    slot = find_slot(doctor.id, appointment.date, appointment.time, db)
    if slot is None:
        return False

    slot.available = True
    return True


def resolve_patient(patient_id: str, db: Session) -> dict:
    user = db.query(User).filter(User.id == patient_id).first()
    if user is None:
        return {
            'id': patient_id,
            'name': UNKNOWN_PATIENT_NAME,
            'email': UNKNOWN_PATIENT_EMAIL,
            'phone': config.DEFAULT_PHONE,
        }
    return {'id': user.id, 'name': user.name, 'email': user.email, 'phone': user.phone}


def record_patient_visit(patient_info: dict, visit_date: str, db: Session) -> Patient:
    patient = db.query(Patient).filter(Patient.id == patient_info['id']).first()
    if patient is None:
        patient = Patient(
            id=patient_info['id'],
            name=patient_info['name'],
            email=patient_info['email'],
            phone=patient_info['phone'],
            medical_history=[],
            last_visit=visit_date,
            total_appointments=1,
        )
        db.add(patient)
    else:
        patient.last_visit = visit_date
        patient.total_appointments = (patient.total_appointments or 0) + 1
    return patient


def get_appointment_or_404(appointment_id: str, db: Session) -> Appointment:
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if appointment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Appointment not found',
        )
    return appointment


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def book_appointment(data: BookAppointmentRequest, db: Session = Depends(get_db)):
    doctor = get_doctor_or_404(data.doctor_id, db)

    try:
        slot = find_slot(doctor.id, data.date, data.time, db)
        if slot is None or not slot.available or not claim_slot(slot, db):
            logger.warning('Rejected booking for doctor %s at %s %s: slot not available', doctor.id, data.date, data.time)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Slot not available',
            )

        patient_info = resolve_patient(data.patient_id, db)

        appointment = Appointment(
            id=str(uuid.uuid4()),
            doctor_id=doctor.id,
            doctor_name=doctor.name,
            specialty=doctor.specialty,
            date=data.date,
            time=data.time,
            status='upcoming',
            type=data.type,
            patient_id=data.patient_id,
        )
        db.add(appointment)

        now = utc_timestamp()
        db.add(
            DoctorAppointment(
                id=str(uuid.uuid4()),
                doctor_id=doctor.id,
                patient_id=patient_info['id'],
                patient_name=patient_info['name'],
                patient_phone=patient_info['phone'],
                patient_email=patient_info['email'],
                date=data.date,
                time=data.time,
                status='pending',
                type=data.type,
                notes=data.notes or '',
                symptoms=data.symptoms or '',
                prescription='',
                created_at=now,
                updated_at=now,
            )
        )

        record_patient_visit(patient_info, data.date, db)

        db.commit()
        db.refresh(appointment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable.',
        ) from exc
    except HTTPException:
        db.rollback()
        raise

    logger.info('Booked appointment %s with %s on %s at %s', appointment.id, doctor.name, data.date, data.time)
    return appointment


@router.get('/{patient_id}', response_model=list[AppointmentResponse])
def list_patient_appointments(patient_id: str, db: Session = Depends(get_db)):
    return db.query(Appointment).filter(Appointment.patient_id == patient_id).all()


@router.patch('/{appointment_id}', response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: str,
    data: UpdateAppointmentStatusRequest,
    db: Session = Depends(get_db),
):
    appointment = get_appointment_or_404(appointment_id, db)

    try:
        appointment.status = data.status
        db.commit()
        db.refresh(appointment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable.',
        ) from exc

    return appointment


@router.delete('/{appointment_id}', response_model=MessageResponse)
def cancel_appointment(appointment_id: str, db: Session = Depends(get_db)):
    appointment = get_appointment_or_404(appointment_id, db)

    try:
        slot_released = release_slot(appointment, db)
        db.delete(appointment)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable.',
        ) from exc

    logger.info('Cancelled appointment %s (slot released: %s)', appointment_id, slot_released)
    return MessageResponse(message='Appointment cancelled successfully')
