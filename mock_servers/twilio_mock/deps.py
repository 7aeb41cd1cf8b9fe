"""FastAPI dependency providers.

Routes never reach for module globals directly; tests replace any of
these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends

from mock_servers.twilio_mock.db import InMemoryStore, get_store
from mock_servers.twilio_mock.dialog import DialogResolver, DialogResolverFactory
from mock_servers.twilio_mock.identity import IdentitySynthesizer, RandomIdentitySynthesizer
from mock_servers.twilio_mock.services import (
    AssistantService,
    AutopilotService,
    ChannelService,
    MessageService,
    PhoneNumberService,
    ServiceChannelService,
)
from mock_servers.twilio_mock.tokens import TokenDecoder, UnverifiedTokenDecoder

_synthesizer = RandomIdentitySynthesizer()
_token_decoder = UnverifiedTokenDecoder()


def get_synthesizer() -> IdentitySynthesizer:
    return _synthesizer


def get_token_decoder() -> TokenDecoder:
    return _token_decoder


def get_dialog_resolver_factory() -> DialogResolverFactory:
    return DialogResolver


def get_channel_service(store: InMemoryStore = Depends(get_store)) -> ChannelService:
    return ChannelService(store)


def get_message_service(
    store: InMemoryStore = Depends(get_store),
    resolver_factory: DialogResolverFactory = Depends(get_dialog_resolver_factory),
) -> MessageService:
    return MessageService(store, resolver_factory)


def get_autopilot_service(store: InMemoryStore = Depends(get_store)) -> AutopilotService:
    return AutopilotService(store)


def get_service_channel_service(
    store: InMemoryStore = Depends(get_store),
) -> ServiceChannelService:
    return ServiceChannelService(store)


def get_assistant_service(
    store: InMemoryStore = Depends(get_store),
    synthesizer: IdentitySynthesizer = Depends(get_synthesizer),
) -> AssistantService:
    return AssistantService(store, synthesizer)


def get_phone_number_service(
    store: InMemoryStore = Depends(get_store),
    synthesizer: IdentitySynthesizer = Depends(get_synthesizer),
) -> PhoneNumberService:
    return PhoneNumberService(store, synthesizer)
