"""
Model version history.

Provides the in-memory and MongoDB-backed version ledgers.
"""

from .ledger import ModelVersionSnapshot, VersionHistory, VersionLedger
from .mongo import MongoVersionLedger

__all__ = [
    "ModelVersionSnapshot",
    "VersionHistory",
    "VersionLedger",
    "MongoVersionLedger",
]
