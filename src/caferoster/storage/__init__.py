"""Storage for employees, shifts, availability and rosters."""

from caferoster.storage.json_store import JsonFileRepository
from caferoster.storage.repository import InMemoryRepository, RosterRepository

__all__ = [
    "InMemoryRepository",
    "JsonFileRepository",
    "RosterRepository",
]
