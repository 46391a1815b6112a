"""
Contact submission CRUD operations.
"""
from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.model.contact import Contact
from app.crud.base import CRUDBase


class CRUDContact(CRUDBase[Contact, dict, dict]):
    """Contact CRUD."""

    def list_newest_first(self, db: Session) -> List[Contact]:
        return db.query(self.model).order_by(desc(self.model.id)).all()


contact_crud = CRUDContact(Contact)
