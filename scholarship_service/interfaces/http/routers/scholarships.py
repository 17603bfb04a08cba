from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ....config import settings
from ....domain.entities import Identity
from ....domain.lifecycle import normalize_deadline, parse_object_id
from ....infrastructure.cache import JsonCache, get_cache
from ....infrastructure.db import get_db
from ....infrastructure.models import ScholarshipORM
from ..authz import require_admin_or_moderator
from ..schemas import ScholarshipCreate, ScholarshipOut, ScholarshipUpdate

router = APIRouter(tags=["scholarships"])

TOP_SCHOLARSHIPS = 6


def _get_or_404(db: Session, scholarship_id: str) -> ScholarshipORM:
    row = db.get(ScholarshipORM, parse_object_id(scholarship_id))
    if not row: raise HTTPException(404, "scholarship not found")
    return row


def _invalidate(cache: JsonCache) -> None:
    cache.delete_pattern("scholarships:*")


@router.get("/scholarships", response_model=list[ScholarshipOut])
def list_scholarships(
    q: str | None = Query(None, max_length=100),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    cache: JsonCache = Depends(get_cache),
):
    cache_key = f"scholarships:list:{q or ''}:{limit}:{offset}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    query = db.query(ScholarshipORM)
    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            ScholarshipORM.scholarship_name.ilike(like),
            ScholarshipORM.university_name.ilike(like),
            ScholarshipORM.degree.ilike(like),
        ))
    rows = query.order_by(ScholarshipORM.post_date.desc()).limit(limit).offset(offset).all()
    result = [ScholarshipOut.model_validate(row) for row in rows]
    cache.set(cache_key, [r.model_dump(mode="json") for r in result])
    return result


@router.get("/top-scholarships", response_model=list[ScholarshipOut])
def top_scholarships(db: Session = Depends(get_db), cache: JsonCache = Depends(get_cache)):
    cache_key = "scholarships:top"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached
    rows = (db.query(ScholarshipORM)
            .order_by(ScholarshipORM.application_fees.asc(), ScholarshipORM.post_date.desc())
            .limit(TOP_SCHOLARSHIPS).all())
    result = [ScholarshipOut.model_validate(row) for row in rows]
    cache.set(cache_key, [r.model_dump(mode="json") for r in result])
    return result


@router.get("/scholarship/{scholarship_id}", response_model=ScholarshipOut)
def get_scholarship(scholarship_id: str, db: Session = Depends(get_db)):
    return _get_or_404(db, scholarship_id)


# --- Staff-only CRUD:

@router.post("/add-scholarship", response_model=ScholarshipOut, status_code=status.HTTP_201_CREATED)
def add_scholarship(
    payload: ScholarshipCreate,
    identity: Identity = Depends(require_admin_or_moderator),
    db: Session = Depends(get_db),
    cache: JsonCache = Depends(get_cache),
):
    data = payload.model_dump()
    data["application_deadline"] = normalize_deadline(payload.application_deadline, ZoneInfo(settings.TIMEZONE))
    row = ScholarshipORM(**data, posted_user_email=identity.email)
    db.add(row); db.commit(); db.refresh(row)
    _invalidate(cache)
    return row


@router.put("/scholarship/update/{scholarship_id}", response_model=ScholarshipOut,
            dependencies=[Depends(require_admin_or_moderator)])
def update_scholarship(
    scholarship_id: str,
    payload: ScholarshipUpdate,
    db: Session = Depends(get_db),
    cache: JsonCache = Depends(get_cache),
):
    row = _get_or_404(db, scholarship_id)
    changes = payload.model_dump(exclude_unset=True)
    if "application_deadline" in changes:
        changes["application_deadline"] = normalize_deadline(changes["application_deadline"], ZoneInfo(settings.TIMEZONE))
    for name, value in changes.items():
        setattr(row, name, value)
    db.commit(); db.refresh(row)
    _invalidate(cache)
    return row


@router.delete("/scholarship/{scholarship_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_admin_or_moderator)])
def delete_scholarship(scholarship_id: str, db: Session = Depends(get_db), cache: JsonCache = Depends(get_cache)):
    row = _get_or_404(db, scholarship_id)
    db.delete(row); db.commit()
    _invalidate(cache)
