"""DOI server model for DOI registration service configuration."""

from sqlalchemy import Column, ForeignKey, Integer, Sequence, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doi_registry.db.base import Base
from doi_registry.models.group import Group

DEFAULT_PATTERN = "{{uuid}}"

NAME_MAX_LENGTH = 32
DESCRIPTION_MAX_LENGTH = 255
URL_MAX_LENGTH = 255
USERNAME_MAX_LENGTH = 128
PASSWORD_MAX_LENGTH = 128
PREFIX_MAX_LENGTH = 15

doiservers_group = Table(
    "doiservers_group",
    Base.metadata,
    Column("doiserver_id", ForeignKey("doiservers.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
)


class DoiServer(Base):
    """DOI server database model.

    The password column only ever holds ciphertext, see
    ``doi_registry.core.security.SecretCipher``.
    """

    __tablename__ = "doiservers"

    id: Mapped[int] = mapped_column(
        Integer,
        Sequence("doiserver_id_seq", start=100),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), unique=True, index=True)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    api_url: Mapped[str] = mapped_column("url", String(URL_MAX_LENGTH))
    username: Mapped[str | None] = mapped_column(
        String(USERNAME_MAX_LENGTH), nullable=True
    )
    # Fernet token, several times the plaintext length
    encrypted_password: Mapped[str | None] = mapped_column(
        "password", Text, nullable=True
    )
    landing_page_template: Mapped[str] = mapped_column(String(URL_MAX_LENGTH))
    public_url: Mapped[str] = mapped_column(String(URL_MAX_LENGTH))
    pattern: Mapped[str] = mapped_column(String(URL_MAX_LENGTH), default=DEFAULT_PATTERN)
    prefix: Mapped[str] = mapped_column(String(PREFIX_MAX_LENGTH))

    publication_groups: Mapped[list[Group]] = relationship(
        secondary=doiservers_group,
        lazy="selectin",
        order_by=Group.name,
    )

    def __repr__(self) -> str:
        return f"DoiServer(id={self.id!r}, name={self.name!r}, prefix={self.prefix!r})"

    @property
    def has_password(self) -> bool:
        return bool(self.encrypted_password)
