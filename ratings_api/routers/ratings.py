from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratings_api.database import get_db
from ratings_api.crud.ratings import create_rating
from ratings_api.schemas.ratings import RatingCreate, MessageResponse

router = APIRouter()

# Público: lo usa la pantalla de la sucursal, sin token
@router.post("", response_model=MessageResponse)
def submit_rating(rating: RatingCreate, db: Session = Depends(get_db)):
    create_rating(
        db,
        employee_id=rating.employee_id,
        stars=rating.stars,
        comment=rating.comment,
        email=rating.email,
    )
    return {"message": "Calificación registrada"}
