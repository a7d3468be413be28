"""
Layout of databases created on managed instances.

Every database created through this service holds its entries in a single
collection.
"""


class Collections:
    """Collection names in a managed database."""
    ENTRIES = "entries"
