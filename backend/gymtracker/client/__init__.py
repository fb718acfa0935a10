from gymtracker.client.api import GymTrackerClient, RemoteError
from gymtracker.client.session_cache import SessionStateCache, SetEntry, ActiveSession
from gymtracker.client.storage import MemoryStorage, JsonFileStorage

__all__ = [
    "GymTrackerClient",
    "RemoteError",
    "SessionStateCache",
    "SetEntry",
    "ActiveSession",
    "MemoryStorage",
    "JsonFileStorage",
]
