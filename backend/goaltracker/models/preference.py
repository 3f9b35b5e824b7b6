from sqlalchemy import Column, String

from goaltracker.db import Base


class AppPreference(Base):
    """Single scalar settings the app remembers between launches."""

    __tablename__ = "app_preferences"

    key = Column(String(64), primary_key=True)
    value = Column(String, nullable=True)
