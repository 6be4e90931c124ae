from .json_store import JsonFactionRepository

__all__ = ["JsonFactionRepository"]
