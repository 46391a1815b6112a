"""
Users API: Firebase user registry and admin lookup.
"""
import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schema.user import (
    AdminEnvelope,
    AdminInfo,
    FirebaseUserUpsert,
    UserEnvelope,
    UserResponse,
)
from app.service.user_service import UserService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/users/firebase", response_model=UserEnvelope, status_code=status.HTTP_200_OK)
async def upsert_firebase_user(
    body: FirebaseUserUpsert,
    response: Response,
    db: Session = Depends(get_db),
):
    """Called by the client after every Firebase sign-in. 201 on first registration, 200 afterwards."""
    user, created = UserService(db).register_or_touch(body)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get("/users/firebase", response_model=UserEnvelope)
async def get_firebase_user(
    uid: str = Query(..., min_length=1, description="Firebase UID."),
    db: Session = Depends(get_db),
):
    user = UserService(db).get_by_uid(uid)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get("/admin", response_model=AdminEnvelope)
async def get_admin(db: Session = Depends(get_db)):
    """The admin's public identifier, email and display name."""
    admin = UserService(db).get_admin()
    return AdminEnvelope(admin=AdminInfo.model_validate(admin))
