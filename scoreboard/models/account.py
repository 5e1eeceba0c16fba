# scoreboard/models/account.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from scoreboard.database import Base
from scoreboard.schema.account import Role, Theme


class UserAccount(Base):
    """
    Sign-in identity. Profiles live in `admins` and are created in a
    second step, so an identity can exist without one.
    """

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    profile = relationship(
        "Admin",
        back_populates="account",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Admin(Base):
    __tablename__ = "admins"

    id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.VIEWER.value)
    theme = Column(String, nullable=False, default=Theme.LIGHT.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    account = relationship("UserAccount", back_populates="profile")
