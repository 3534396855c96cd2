from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from webpulse.database import Base
from webpulse.models.status import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    team = relationship("Team", back_populates="members", foreign_keys=[team_id])
    projects = relationship(
        "Project",
        secondary="user_projects",
        back_populates="members",
        order_by="Project.id",
    )
    tasks = relationship(
        "Task",
        back_populates="assigned_user",
        foreign_keys="[Task.assigned_user_id]",
        order_by="Task.id",
    )
