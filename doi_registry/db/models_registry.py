"""
Model registry for metadata creation.

Import all models here to ensure they are registered with SQLAlchemy metadata.
"""

from doi_registry.db.base import Base
from doi_registry.models.doi_server import DoiServer, doiservers_group
from doi_registry.models.group import Group
from doi_registry.models.publication import DoiPublication

__all__ = [
    "Base",
    "DoiPublication",
    "DoiServer",
    "Group",
    "doiservers_group",
]
