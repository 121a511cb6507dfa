"""Database models."""

from doi_registry.models.doi_server import DoiServer, doiservers_group
from doi_registry.models.group import Group
from doi_registry.models.publication import DoiPublication

__all__ = [
    "DoiPublication",
    "DoiServer",
    "Group",
    "doiservers_group",
]
