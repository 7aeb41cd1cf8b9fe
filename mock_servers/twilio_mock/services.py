"""Mocked server-side behaviour behind the Twilio routes.

Each service gets the store (and whatever else it needs) injected, so the
routes stay thin and tests can drive the services directly.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from mock_servers.twilio_mock.db import (
    ASSISTANT_ID_KEY,
    CHATBOT_KEY,
    CUSTOMER_ID_KEY,
    MISSING,
    SCHEMA_KEY,
    InMemoryStore,
    channel_key,
    messages_key,
)
from mock_servers.twilio_mock.dialog import DialogContext, DialogResolverFactory
from mock_servers.twilio_mock.errors import MalformedBodyError, NotFoundError
from mock_servers.twilio_mock.identity import (
    IdentitySynthesizer,
    assistant_sid,
    phone_number_sid,
)
from mock_servers.twilio_mock.models import (
    AssistantResponse,
    ChannelRecord,
    ChatbotRecord,
    MessageRecord,
    PhoneNumberResponse,
    ServiceChannelResponse,
)

logger = logging.getLogger(__name__)


class ChannelService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def get_or_create(self, channel_name: str, identity: str, service_sid: str) -> str:
        """Create the channel on first access; later calls leave it untouched."""
        with self.store.locked():
            if self.store.exists(channel_key(channel_name)):
                return channel_name
            record = ChannelRecord(
                name=channel_name,
                customer_id=identity,
                chat_id=service_sid,
            )
            self.store.write(channel_key(channel_name), record.model_dump())
            self.store.write(messages_key(channel_name), [])
        logger.info("Created channel %s for %s", channel_name, identity)
        return channel_name

    def get(self, channel_name: str) -> Dict[str, Any]:
        record = self.store.read(channel_key(channel_name))
        if record is MISSING:
            raise NotFoundError(f"Channel '{channel_name}' not found")
        return record


class MessageService:
    def __init__(
        self,
        store: InMemoryStore,
        resolver_factory: DialogResolverFactory,
    ) -> None:
        self.store = store
        self.resolver_factory = resolver_factory

    def list_all(self, channel_name: str) -> List[Any]:
        return list(self.store.get(messages_key(channel_name)) or [])

    def list_latest(self, channel_name: str) -> Optional[Any]:
        """Last message in the channel, or None when there is none."""
        messages = self.list_all(channel_name)
        return messages[-1] if messages else None

    def append(self, channel_name: str, body: str) -> Dict[str, Any]:
        channel = ChannelService(self.store).get(channel_name)
        author = channel.get("customer_id") if isinstance(channel, dict) else None
        message = MessageRecord(body=body, author=author).model_dump()

        self.store.update(
            messages_key(channel_name),
            lambda messages: [*(messages or []), message],
            default=[],
        )

        resolver = self.resolver_factory(
            channel_name, DialogContext(message=body, store=self.store)
        )
        try:
            resolver.call()
        except Exception:
            # Replies are best-effort; the customer's message is already stored.
            logger.exception("Dialog resolver failed for channel %s", channel_name)
        return message


class AutopilotService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def update_schema(self, raw_schema: str) -> Dict[str, Any]:
        """Decode the JSON-encoded schema string and store it whole."""
        try:
            schema = json.loads(raw_schema)
        except (TypeError, ValueError) as e:
            raise MalformedBodyError(f"'schema' is not valid JSON: {e}") from e
        if not isinstance(schema, dict):
            raise MalformedBodyError("'schema' must encode a JSON object")
        self.store.write(SCHEMA_KEY, schema)
        logger.info("Autopilot schema updated (%d entries)", len(schema))
        return schema

    def get_schema(self) -> Dict[str, Any]:
        return self.store.get(SCHEMA_KEY, {})


class ServiceChannelService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def fetch(self, assistant_id: str, visitor_id: str) -> ServiceChannelResponse:
        with self.store.locked():
            self.store.write(ASSISTANT_ID_KEY, assistant_id)
            self.store.write(CUSTOMER_ID_KEY, visitor_id)
        return ServiceChannelResponse()


class AssistantService:
    def __init__(self, store: InMemoryStore, synthesizer: IdentitySynthesizer) -> None:
        self.store = store
        self.synthesizer = synthesizer

    def create(self, friendly_name: Optional[str]) -> AssistantResponse:
        sid = assistant_sid(self.synthesizer.md5())
        unique_name = f"{sid}-{self.synthesizer.imei()}"
        record = ChatbotRecord(
            friendly_name=friendly_name,
            assistant_sid=sid,
            unique_name=unique_name,
        )
        self.store.write(
            CHATBOT_KEY,
            record.model_dump(include={"friendly_name", "assistant_sid", "unique_name"}),
        )
        logger.info("Created assistant %s (%s)", sid, friendly_name)
        return AssistantResponse(sid=sid, unique_name=unique_name)


class PhoneNumberService:
    def __init__(self, store: InMemoryStore, synthesizer: IdentitySynthesizer) -> None:
        self.store = store
        self.synthesizer = synthesizer

    def provision(self) -> PhoneNumberResponse:
        """Attach a new phone number to the existing chatbot record."""
        with self.store.locked():
            chatbot = self.store.read(CHATBOT_KEY)
            if chatbot is MISSING:
                raise NotFoundError(
                    "No assistant to attach a phone number to; POST /v1/Assistants first"
                )
            sid = phone_number_sid(self.synthesizer.md5())
            phone_number = self.synthesizer.cell_phone()
            self.store.write(
                CHATBOT_KEY,
                {**chatbot, "phone_number": phone_number, "phone_number_sid": sid},
            )
        logger.info("Provisioned phone number %s (%s)", phone_number, sid)
        return PhoneNumberResponse(phone_number=phone_number, sid=sid)
