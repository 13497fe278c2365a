"""Record store layer for URL shortener."""

from .base import URLRecordStoreBase
from .memory import URLRecordStoreMemory
from .mongo import URLRecordStoreMongo
from .postgres import URLRecordStorePostgres
from .models import UrlRecord
from .factory import create_store, connect_store

__all__ = [
    "URLRecordStoreBase",
    "URLRecordStoreMemory",
    "URLRecordStoreMongo",
    "URLRecordStorePostgres",
    "UrlRecord",
    "create_store",
    "connect_store",
]
