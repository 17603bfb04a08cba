from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import EmailStr
from sqlalchemy.orm import Session

from ....domain.entities import Identity, Role
from ....domain.lifecycle import parse_object_id
from ....infrastructure.db import get_db
from ....infrastructure.repositories import UserRepository
from ....application.use_cases.sign_in_user import SignInUser
from ....application.use_cases.manage_users import ChangeUserRole, DeleteUser
from ..authz import get_identity, require_admin, require_self
from ..schemas import RoleResp, RoleUpdate, UserResp, UserSignInReq, UserSignInResp

router = APIRouter(tags=["users"])


@router.post("/users/{email}", response_model=UserSignInResp)
def sign_in_user(email: EmailStr, payload: UserSignInReq, db: Session = Depends(get_db)):
    user, created = SignInUser(UserRepository(db)).execute(email, name=payload.name, photo_url=payload.photo_url)
    return UserSignInResp(created=created, user=UserResp.model_validate(user))


@router.get("/users/role/{email}", response_model=RoleResp)
def user_role(email: str, db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_email(email)
    return RoleResp(role=user.role if user else None)


@router.get("/users/{email}", response_model=list[UserResp])
def list_users(
    email: str,
    role: Role | None = Query(None),
    identity: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    require_self(email, identity)
    return [UserResp.model_validate(u) for u in UserRepository(db).list(role)]


@router.get("/user/{email}", response_model=UserResp)
def get_user(email: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    require_self(email, identity)
    user = UserRepository(db).get_by_email(email)
    if not user:
        raise HTTPException(404, "user not found")
    return UserResp.model_validate(user)


@router.patch("/user-role/{user_id}", response_model=UserResp, dependencies=[Depends(require_admin)])
def change_user_role(user_id: str, payload: RoleUpdate, db: Session = Depends(get_db)):
    user = ChangeUserRole(UserRepository(db)).execute(parse_object_id(user_id), payload.role)
    return UserResp.model_validate(user)


@router.delete("/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_user(user_id: str, db: Session = Depends(get_db)):
    DeleteUser(UserRepository(db)).execute(parse_object_id(user_id))
