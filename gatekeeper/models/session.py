# gatekeeper/models/session.py

from sqlalchemy import Column, String, Text, DateTime
from . import Base


class SessionRecord(Base):
    __tablename__ = "sessions"

    sid = Column(String, primary_key=True)
    data = Column(Text, nullable=False)
    expires_at = Column(DateTime(timezone=True), index=True, nullable=False)
