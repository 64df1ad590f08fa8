"""
User, role and department models.
"""
from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import UserStatus
from app.services.common.permissions import PermissionSet


class Role(BaseModel):
    """
    Named permission bundle.

    `permissions` stores permission strings; the literal "*" grants all.
    """
    __tablename__ = "roles"

    name = Column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique role name"
    )
    description = Column(Text, nullable=True)
    permissions = Column(
        JSON,
        nullable=False,
        default=list,
        comment="Permission strings granted by the role"
    )

    users = relationship("User", back_populates="role")

    @property
    def permission_set(self) -> PermissionSet:
        return PermissionSet.from_strings(self.permissions)


class Department(BaseModel):
    __tablename__ = "departments"

    name = Column(String(150), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    budget = Column(Numeric(14, 2), nullable=True, comment="Annual budget")

    users = relationship("User", back_populates="department")


class User(BaseModel):
    """
    Core User entity.

    Holds login credentials, lifecycle status, the single role that drives
    authorization and the optional department. Users are never hard-deleted;
    deactivation sets status to INACTIVE.
    """
    __tablename__ = "users"
    __table_args__ = (
        {"comment": "Employee identity and authentication"}
    )

    employee_id = Column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Business employee identifier"
    )
    email = Column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique email address (normalized to lowercase)"
    )
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )
    status = Column(
        Enum(UserStatus, name="user_status_enum"),
        nullable=False,
        default=UserStatus.ACTIVE,
        index=True,
        comment="Account lifecycle status"
    )

    role_id = Column(
        String(36),
        ForeignKey("roles.id"),
        nullable=False,
        index=True,
    )
    department_id = Column(
        String(36),
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    last_login_at = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="Last successful login timestamp"
    )

    role = relationship("Role", back_populates="users", lazy="joined")
    department = relationship("Department", back_populates="users", lazy="joined")
    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="joined",
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def full_name(self) -> str:
        if self.profile is None:
            return self.email
        return self.profile.full_name
