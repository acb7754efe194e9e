"""Persistence layer for Netto-It."""

from nettoit.storage.base import KeyValueStorage
from nettoit.storage.documents import (
    DEFAULT_INPUT,
    InputStore,
    export_document,
    parse_document,
    reconcile_input,
)
from nettoit.storage.memory import InMemoryStorage
from nettoit.storage.schema import create_schema
from nettoit.storage.sqlite import SQLiteStorage

__all__ = [
    "DEFAULT_INPUT",
    "InMemoryStorage",
    "InputStore",
    "KeyValueStorage",
    "SQLiteStorage",
    "create_schema",
    "export_document",
    "parse_document",
    "reconcile_input",
]
