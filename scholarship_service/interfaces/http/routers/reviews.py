import math

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ....domain.entities import Identity
from ....domain.lifecycle import parse_object_id
from ....domain.services import average_rating
from ....infrastructure.db import get_db
from ....infrastructure.models import ReviewORM
from ..authz import get_identity, require_admin_or_moderator, require_self, require_self_or_staff
from ..schemas import AverageRatingResp, ReviewCreate, ReviewOut, ReviewUpdate

router = APIRouter(tags=["reviews"])


def _get_or_404(db: Session, review_id: str) -> ReviewORM:
    row = db.get(ReviewORM, parse_object_id(review_id))
    if not row: raise HTTPException(404, "review not found")
    return row


@router.post("/add-review", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def add_review(payload: ReviewCreate, db: Session = Depends(get_db)):
    row = ReviewORM(**payload.model_dump())
    db.add(row); db.commit(); db.refresh(row)
    return row


@router.get("/reviews/{scholarship_id}", response_model=list[ReviewOut])
def scholarship_reviews(scholarship_id: str, db: Session = Depends(get_db)):
    return (db.query(ReviewORM)
            .filter(ReviewORM.scholarship_id == scholarship_id)
            .order_by(ReviewORM.review_date.desc()).all())


@router.get("/average-rating/{scholarship_id}", response_model=AverageRatingResp)
def scholarship_average_rating(scholarship_id: str, db: Session = Depends(get_db)):
    ratings = [r for (r,) in db.query(ReviewORM.rating).filter(ReviewORM.scholarship_id == scholarship_id).all()]
    avg = average_rating(ratings)
    # NaN is not valid JSON; zero reviews are reported as null
    return AverageRatingResp(
        scholarship_id=scholarship_id,
        average_rating=None if math.isnan(avg) else round(avg, 2),
        review_count=len(ratings),
    )


@router.get("/all-reviews", response_model=list[ReviewOut], dependencies=[Depends(require_admin_or_moderator)])
def all_reviews(db: Session = Depends(get_db)):
    return db.query(ReviewORM).order_by(ReviewORM.review_date.desc()).all()


@router.get("/my-reviews/{email}", response_model=list[ReviewOut])
def my_reviews(email: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    require_self(email, identity)
    return (db.query(ReviewORM)
            .filter(ReviewORM.reviewer_email == email)
            .order_by(ReviewORM.review_date.desc()).all())


@router.patch("/review/{review_id}", response_model=ReviewOut)
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, review_id)
    require_self(row.reviewer_email, identity)
    if payload.rating is not None: row.rating = payload.rating
    if payload.comment is not None: row.comment = payload.comment
    db.commit(); db.refresh(row)
    return row


@router.delete("/review/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(review_id: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    row = _get_or_404(db, review_id)
    require_self_or_staff(row.reviewer_email, identity, db)
    db.delete(row); db.commit()
