"""
User registry service. Firebase owns authentication; this keeps the local
profile rows and the admin role.
"""
from datetime import datetime, timezone
from typing import Tuple
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import NotFound, StorageError, ValidationError
from app.crud import user_crud
from app.model.user import User
from app.schema.user import FirebaseUserUpsert
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Handles Firebase user registration, lookups and role resolution."""

    def __init__(self, db: Session):
        self.db = db

    def register_or_touch(self, data: FirebaseUserUpsert) -> Tuple[User, bool]:
        """Create the user on first sign-in, otherwise bump last_login.

        Returns (user, created).
        """
        try:
            user = user_crud.get_by_uid(self.db, data.uid)
            if user:
                return self._touch(user), False
            try:
                user = user_crud.create_from_dict(
                    self.db,
                    obj_in={
                        "uid": data.uid,
                        "email": data.email,
                        "display_name": data.display_name,
                        "photo_url": data.photo_url,
                        "is_admin": data.email == settings.ADMIN_EMAIL,
                        "last_login": datetime.now(timezone.utc),
                    },
                )
            except IntegrityError:
                # Concurrent first sign-in for the same uid already inserted the row
                self.db.rollback()
                user = user_crud.get_by_uid(self.db, data.uid)
                if not user:
                    raise
                return self._touch(user), False
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to register user %s: %s", data.uid, e)
            raise StorageError()

        logger.info(f"User registered: {user.email} (uid: {user.uid}, role: {user.role})")
        return user, True

    def _touch(self, user: User) -> User:
        user = user_crud.update(self.db, db_obj=user, obj_in={"last_login": datetime.now(timezone.utc)})
        logger.info(f"User logged in: {user.email} (uid: {user.uid})")
        return user

    def get_by_uid(self, uid: str) -> User:
        user = user_crud.get_by_uid(self.db, uid)
        if not user:
            raise NotFound("User")
        return user

    def get_admin(self) -> User:
        admin = user_crud.get_admin(self.db)
        if not admin:
            raise NotFound("Admin")
        return admin

    def resolve_roles(self, sender_id: str, receiver_id: str) -> Tuple[str, str]:
        """Return (user_id, admin_id) for a message pair.

        Stored roles decide when both participants are registered. With an
        unregistered side, a known admin keeps the admin slot, a known user
        keeps the user slot, and otherwise the sender is taken as the user
        and the receiver as the admin.
        """
        if sender_id == receiver_id:
            raise ValidationError.for_field("receiverId", "Receiver must differ from sender.")
        users = user_crud.get_many_by_uid(self.db, [sender_id, receiver_id])
        sender, receiver = users.get(sender_id), users.get(receiver_id)

        if sender and receiver:
            if sender.is_admin == receiver.is_admin:
                raise ValidationError.for_field(
                    "receiverId",
                    "A conversation needs exactly one administrator and one user.",
                )
            if receiver.is_admin:
                return sender_id, receiver_id
            return receiver_id, sender_id

        if (sender and sender.is_admin) or (receiver and not receiver.is_admin):
            return receiver_id, sender_id
        return sender_id, receiver_id
