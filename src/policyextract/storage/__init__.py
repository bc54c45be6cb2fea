"""Storage layer for plan overrides and the extraction log."""

from policyextract.storage.repository import PayerRepository, RepositorySink

__all__ = ["PayerRepository", "RepositorySink"]
