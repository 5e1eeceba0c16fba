# scoreboard/models/base.py
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, String, Uuid


def generate_public_id() -> str:
    return uuid.uuid4().hex


class BaseMixin:
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class ContainerMixin(BaseMixin):
    """Named container shared through an opaque public id"""
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    public_id = Column(String, unique=True, nullable=False, default=generate_public_id)
    created_by = Column(Uuid(as_uuid=True), nullable=True)
