# app/models/user.py

from datetime import datetime

from pydantic import Field, PositiveInt
from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base, CamelModel


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    # phone number doubles as the login name
    phone_number = Column(String(32), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())


class UserCreate(CamelModel):
    full_name: str = Field(min_length=1, max_length=255)
    phone_number: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=1)


class UserRead(CamelModel):
    id: PositiveInt
    full_name: str
    phone_number: str
    created_at: datetime
