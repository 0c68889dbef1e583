from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shedula.core.schemas import ApiModel
from shedula.database import get_db
from shedula.models.appointment import Appointment
from shedula.models.doctor import Doctor

router = APIRouter(tags=['stats'])


class StatsResponse(ApiModel):
    total_appointments: int
    upcoming_appointments: int
    completed_appointments: int
    cancelled_appointments: int
    total_doctors: int


def count_by_status(statuses: list[str], wanted: str) -> int:
    return sum(1 for value in statuses if value == wanted)


@router.get('', response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    statuses = [row.status for row in db.query(Appointment.status).all()]

    return StatsResponse(
        total_appointments=len(statuses),
        upcoming_appointments=count_by_status(statuses, 'upcoming'),
        completed_appointments=count_by_status(statuses, 'completed'),
        cancelled_appointments=count_by_status(statuses, 'cancelled'),
        total_doctors=db.query(Doctor).count(),
    )
