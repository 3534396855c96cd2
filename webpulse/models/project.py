from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from webpulse.database import Base
from webpulse.models.status import status_column, utcnow


user_projects = Table(
    "user_projects",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
)


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    project_name = Column(String(100), nullable=False)
    project_description = Column(Text, nullable=True)
    project_status = status_column()
    date_created = Column(DateTime(timezone=True), default=utcnow)
    date_due = Column(Date, nullable=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)

    team = relationship("Team", back_populates="projects", foreign_keys=[team_id])
    members = relationship(
        "User",
        secondary=user_projects,
        back_populates="projects",
        order_by="User.id",
    )
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        foreign_keys="[Task.project_id]",
        order_by="Task.id",
    )
