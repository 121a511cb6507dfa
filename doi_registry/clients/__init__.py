"""DOI provider clients."""

from doi_registry.clients.datacite_client import DataCiteClient

__all__ = ["DataCiteClient"]
