from domaingen.db.memory import InMemoryRepository

__all__ = ["InMemoryRepository"]
