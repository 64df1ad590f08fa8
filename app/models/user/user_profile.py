"""
Employee profile model (1:1 with User).
"""
from sqlalchemy import Column, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.models.base.base_model import BaseModel


class Profile(BaseModel):
    """
    Personal and employment attributes of a user.

    Created together with the user and updated independently.
    """
    __tablename__ = "profiles"

    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    date_of_birth = Column(Date, nullable=True)

    job_title = Column(String(150), nullable=True)
    hire_date = Column(Date, nullable=True)
    salary = Column(Numeric(12, 2), nullable=True)

    user = relationship("User", back_populates="profile")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
