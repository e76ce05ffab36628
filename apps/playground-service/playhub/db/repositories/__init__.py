"""
Per-collection repository modules for document access.

Each module touches exactly one collection. Relationships between collections
are maintained by ``playhub.services.reference_sync``.
"""
