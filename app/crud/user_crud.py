"""
Firebase user CRUD operations.
"""
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from app.model.user import User
from app.crud.base import CRUDBase


class CRUDUser(CRUDBase[User, dict, dict]):
    """User-specific CRUD operations."""

    def get_by_uid(self, db: Session, uid: str) -> Optional[User]:
        return self.get_by_field(db, "uid", uid)

    def get_admin(self, db: Session) -> Optional[User]:
        """First admin by id. Exactly one is expected by convention."""
        return (
            db.query(self.model)
            .filter(self.model.is_admin.is_(True))
            .order_by(self.model.id)
            .first()
        )

    def get_many_by_uid(self, db: Session, uids: List[str]) -> Dict[str, User]:
        if not uids:
            return {}
        users = db.query(self.model).filter(self.model.uid.in_(set(uids))).all()
        return {u.uid: u for u in users}


user_crud = CRUDUser(User)
