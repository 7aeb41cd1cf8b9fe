"""Autopilot-style auto replies for mocked chat channels.

The schema posted to ``/autopilot/update`` maps customer utterances to bot
replies. When a customer message matches one of them, the resolver posts
the reply into the same channel, authored by the chatbot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from mock_servers.twilio_mock.db import (
    CHATBOT_KEY,
    SCHEMA_KEY,
    InMemoryStore,
    messages_key,
)
from mock_servers.twilio_mock.models import MessageRecord

logger = logging.getLogger(__name__)

DEFAULT_BOT_AUTHOR = "assistant"


@dataclass
class DialogContext:
    """What the resolver sees of the request that triggered it."""

    message: str
    store: InMemoryStore


class DialogResolver:
    def __init__(self, channel_name: str, context: DialogContext) -> None:
        self.channel_name = channel_name
        self.context = context

    def call(self) -> Optional[Dict[str, Any]]:
        store = self.context.store
        schema = store.get(SCHEMA_KEY, {})
        if not isinstance(schema, dict):
            return None

        reply = _lookup(schema, self.context.message)
        if reply is None:
            logger.debug("No autopilot reply for %r", self.context.message)
            return None

        chatbot = store.get(CHATBOT_KEY, {})
        author = chatbot.get("assistant_sid") if isinstance(chatbot, dict) else None
        record = MessageRecord(body=str(reply), author=author or DEFAULT_BOT_AUTHOR)
        message = record.model_dump()

        store.update(
            messages_key(self.channel_name),
            lambda messages: [*(messages or []), message],
            default=[],
        )
        logger.info("Autopilot replied in channel %s", self.channel_name)
        return message


def _lookup(schema: Dict[str, Any], utterance: str) -> Optional[Any]:
    if utterance in schema:
        return schema[utterance]
    normalized = utterance.strip().lower()
    for key, value in schema.items():
        if str(key).strip().lower() == normalized:
            return value
    return None


DialogResolverFactory = Callable[[str, DialogContext], DialogResolver]
