# app/services/user_service.py

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.common.errors import ConflictError, NotFoundError, ensure_user_id
from app.core.security import get_password_hash, verify_password
from app.models.user import User, UserCreate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        ensure_user_id(user_id)
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.phone_number == phone_number)).first()

    def create_user(self, user_in: UserCreate) -> User:
        if self.get_by_phone_number(user_in.phone_number) is not None:
            raise ConflictError("Phone number is already registered")

        db_user = User(
            full_name=user_in.full_name,
            phone_number=user_in.phone_number,
            hashed_password=get_password_hash(user_in.password),
        )
        self.db.add(db_user)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_user)

        logger.info("User registered: %s", db_user.id)
        return db_user

    def authenticate(self, phone_number: str, password: str) -> Optional[User]:
        user = self.get_by_phone_number(phone_number)
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user
