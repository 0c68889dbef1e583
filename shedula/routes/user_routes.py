from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shedula.core.schemas import ApiModel
from shedula.database import get_db
from shedula.models.user import User

router = APIRouter(tags=['users'])


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    phone: str


class UpdateUserRequest(ApiModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


def get_user_or_404(user_id: str, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='User not found',
        )
    return user


@router.get('/{user_id}', response_model=UserResponse)
def get_user_profile(user_id: str, db: Session = Depends(get_db)):
    return get_user_or_404(user_id, db)


@router.put('/{user_id}', response_model=UserResponse)
def update_user_profile(user_id: str, data: UpdateUserRequest, db: Session = Depends(get_db)):
    user = get_user_or_404(user_id, db)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if 'email' in changes and changes['email'] != user.email:
        taken = db.query(User).filter(User.email == changes['email'], User.id != user.id).first()
        if taken:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='User already exists with this email',
            )

    try:
        for field, value in changes.items():
            setattr(user, field, value)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Database unavailable.',
        ) from exc

    return user
