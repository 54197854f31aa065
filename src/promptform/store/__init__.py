"""Form and submission persistence."""

from promptform.store.base import FormStore
from promptform.store.memory import InMemoryFormStore

__all__ = ["FormStore", "InMemoryFormStore"]
