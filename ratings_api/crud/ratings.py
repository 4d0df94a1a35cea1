import calendar
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ratings_api.errors import NotFound
from ratings_api.models import Employee, Rating, utc_now
from ratings_api.schemas.employees import RatingPeriod


def shift_months(moment: datetime, months: int) -> datetime:
    """Corre la fecha N meses calendario; el día se recorta al largo del mes (31/3 - 1 mes = 28/2)."""
    total = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period: Optional[RatingPeriod], now: Optional[datetime] = None) -> Optional[datetime]:
    now = now or utc_now()
    if period == RatingPeriod.WEEK:
        return now - timedelta(days=7)
    if period == RatingPeriod.MONTH:
        return shift_months(now, -1)
    if period == RatingPeriod.YEAR:
        return shift_months(now, -12)
    return None


def create_rating(db: Session, employee_id: int, stars: int, comment=None, email=None) -> Rating:
    if not db.get(Employee, employee_id):
        raise NotFound("Empleado no encontrado")

    rating = Rating(employee_id=employee_id, stars=stars, comment=comment, email=email)
    db.add(rating)
    db.commit()
    db.refresh(rating)
    return rating


def ratings_summary(db: Session, employee_id: int, period: Optional[RatingPeriod] = None) -> dict:
    query = db.query(
        func.count(Rating.id).label("total"),
        func.avg(Rating.stars).label("average"),
    ).filter(Rating.employee_id == employee_id)

    since = period_start(period)
    if since is not None:
        query = query.filter(Rating.created_at >= since)

    row = query.one()
    total = row.total or 0
    average = round(float(row.average), 2) if total else None
    return {"employee_id": employee_id, "total": total, "average": average}
