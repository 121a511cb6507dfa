"""DOI server registry.

Configuration store for external DOI registration services.
"""

__version__ = "0.1.0"
