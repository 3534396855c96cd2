from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from webpulse.database import Base
from webpulse.models.status import utcnow


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    team_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    members = relationship("User", back_populates="team", order_by="User.id")
    projects = relationship("Project", back_populates="team", order_by="Project.id")
