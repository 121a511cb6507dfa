"""Published DOI model, one row per registered metadata record."""

import time

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from doi_registry.db.base import Base


class DoiPublication(Base):
    """DOI registered for a metadata record through a DOI server."""

    __tablename__ = "doipublications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    doiserver_id: Mapped[int] = mapped_column(
        ForeignKey("doiservers.id"), index=True
    )
    metadata_uuid: Mapped[str] = mapped_column(String(255), index=True)
    doi: Mapped[str] = mapped_column(String(255), unique=True)
    created_at: Mapped[int] = mapped_column(
        BigInteger, default=lambda: int(time.time() * 1000)
    )
