"""Core infrastructure: configuration, logging, storage and notifications."""

from ticketapp.core.config import Config, ConfigError
from ticketapp.core.notifications import ConsoleNotifier, Notifier, RecordingNotifier
from ticketapp.core.store import JsonFileStore, KeyValueStore, MemoryStore, StorageKeys

__all__ = [
    "Config",
    "ConfigError",
    "ConsoleNotifier",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "Notifier",
    "RecordingNotifier",
    "StorageKeys",
]
