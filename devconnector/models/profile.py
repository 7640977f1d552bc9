# profile.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text, func
from sqlalchemy.orm import relationship
from devconnector.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    # One profile per user; the upsert path relies on this constraint.
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    company = Column(String(255), nullable=True)
    website = Column(String(512), nullable=True)
    location = Column(String(255), nullable=True)
    status = Column(String(255), nullable=False)
    githubusername = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    social = Column(JSON, nullable=False, default=dict)
    # Embedded entries, newest first. Always reassign, never mutate in place.
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", lazy="joined")
