"""Data storage layer."""

from app.storage.recipients import KEY_RECIPIENTS, RecipientStore, chat_id_for

__all__ = [
    "KEY_RECIPIENTS",
    "RecipientStore",
    "chat_id_for",
]
