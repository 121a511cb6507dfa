"""Group model for publication authorization."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from doi_registry.db.base import Base


class Group(Base):
    """Authorization group database model."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(32), unique=True, index=True)
