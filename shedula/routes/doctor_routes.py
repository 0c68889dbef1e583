from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from shedula.core.schemas import ApiModel
from shedula.database import get_db
from shedula.models.doctor import Doctor, DoctorSlot

router = APIRouter(tags=['doctors'])


class SlotResponse(ApiModel):
    date: str
    time: str
    available: bool


class DoctorResponse(ApiModel):
    id: str
    name: str
    specialty: str
    experience: str
    rating: float
    image: str
    availability: list[str] = []
    available_slots: list[SlotResponse] = []


def get_doctor_or_404(doctor_id: str, db: Session) -> Doctor:
    doctor = db.query(Doctor).filter(Doctor.id == doctor_id).first()
    if doctor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Doctor not found',
        )
    return doctor


def search_doctors(db: Session, specialty: str | None = None, name: str | None = None) -> list[Doctor]:
    """Case-insensitive substring match on specialty and name; both filters are optional."""
    doctors = db.query(Doctor).order_by(Doctor.id.asc()).all()

    if specialty:
        needle = specialty.lower()
        doctors = [doctor for doctor in doctors if needle in (doctor.specialty or '').lower()]

    if name:
        needle = name.lower()
        doctors = [doctor for doctor in doctors if needle in (doctor.name or '').lower()]

    return doctors


@router.get('', response_model=list[DoctorResponse])
def list_doctors(db: Session = Depends(get_db)):
    return db.query(Doctor).order_by(Doctor.id.asc()).all()


# Registered before '/{doctor_id}' so 'search' is never taken for an id.
@router.get('/search', response_model=list[DoctorResponse])
def search_doctor_catalogue(
    specialty: str | None = Query(default=None),
    name: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return search_doctors(db, specialty=specialty, name=name)


@router.get('/{doctor_id}', response_model=DoctorResponse)
def get_doctor(doctor_id: str, db: Session = Depends(get_db)):
    return get_doctor_or_404(doctor_id, db)


@router.get('/{doctor_id}/slots', response_model=list[SlotResponse])
def list_open_slots(doctor_id: str, db: Session = Depends(get_db)):
    get_doctor_or_404(doctor_id, db)

    return db.query(DoctorSlot).filter(
        DoctorSlot.doctor_id == doctor_id,
        DoctorSlot.available.is_(True),
    ).order_by(DoctorSlot.id.asc()).all()
