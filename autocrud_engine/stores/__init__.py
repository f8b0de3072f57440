"""
Storage collaborators.

Abstract store interfaces with in-memory and MongoDB implementations.
"""

from .base import ModelStore, RecordStore
from .memory import InMemoryModelStore, InMemoryRecordStore
from .mongo import MongoModelStore, MongoRecordStore

__all__ = [
    "ModelStore",
    "RecordStore",
    "InMemoryModelStore",
    "InMemoryRecordStore",
    "MongoModelStore",
    "MongoRecordStore",
]
