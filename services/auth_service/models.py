from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.sql import func

from shared.config.database import Base
from shared.security.roles import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.CUSTOMER,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
