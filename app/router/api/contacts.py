"""
Contact form API: landing-page submissions.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_acting_user_id
from app.core.exceptions import Forbidden, StorageError
from app.crud import contact_crud, user_crud
from app.schema.contact import (
    ContactCreate,
    ContactCreatedResponse,
    ContactListResponse,
    ContactResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=ContactCreatedResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    body: ContactCreate,
    db: Session = Depends(get_db),
):
    """Store a contact form submission. created_at is set by the database at write time."""
    try:
        contact = contact_crud.create_from_dict(db, obj_in=body.model_dump())
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error submitting contact form: %s", e)
        raise StorageError("An error occurred while submitting the contact form")
    logger.info(f"Contact form submitted: {contact.email} ({contact.subject})")
    return ContactCreatedResponse(
        message="Contact form submitted successfully",
        contact=ContactResponse.model_validate(contact),
    )


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    acting_user_id: Optional[str] = Depends(get_acting_user_id),
    db: Session = Depends(get_db),
):
    """All submissions, newest first. Admin only (X-User-ID must be the admin uid)."""
    try:
        user = user_crud.get_by_uid(db, acting_user_id) if acting_user_id else None
        if not user or not user.is_admin:
            raise Forbidden()
        contacts = contact_crud.list_newest_first(db)
    except SQLAlchemyError as e:
        logger.exception("Error listing contact submissions: %s", e)
        raise StorageError()
    return ContactListResponse(contacts=[ContactResponse.model_validate(c) for c in contacts])
