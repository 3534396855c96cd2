from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from webpulse.database import Base
from webpulse.models.status import status_column, utcnow


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    task_name = Column(String(100), nullable=False)
    task_description = Column(Text, nullable=True)
    task_status = status_column()
    date_created = Column(DateTime(timezone=True), default=utcnow)
    date_due = Column(Date, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    assigned_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    project = relationship("Project", back_populates="tasks", foreign_keys=[project_id])
    assigned_user = relationship("User", back_populates="tasks", foreign_keys=[assigned_user_id])
