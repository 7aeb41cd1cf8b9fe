"""Twilio REST API endpoints.

Implements:
    GET  /v2/Services/{assistant_id}/Channels/{visitor_id}
    POST /v1/Assistants
    POST /{api_v}/Accounts/{account_id}/IncomingPhoneNumbers.json
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form

from mock_servers.twilio_mock.deps import (
    get_assistant_service,
    get_phone_number_service,
    get_service_channel_service,
)
from mock_servers.twilio_mock.models import (
    AssistantResponse,
    PhoneNumberResponse,
    ServiceChannelResponse,
)
from mock_servers.twilio_mock.services import (
    AssistantService,
    PhoneNumberService,
    ServiceChannelService,
)

router = APIRouter(tags=["REST"])


@router.get(
    "/v2/Services/{assistant_id}/Channels/{visitor_id}",
    response_model=ServiceChannelResponse,
)
async def fetch_service_channel(
    assistant_id: str,
    visitor_id: str,
    service_channels: ServiceChannelService = Depends(get_service_channel_service),
):
    return service_channels.fetch(assistant_id, visitor_id)


@router.post("/v1/Assistants", response_model=AssistantResponse)
async def create_assistant(
    friendly_name: Optional[str] = Form(None, alias="FriendlyName"),
    assistants: AssistantService = Depends(get_assistant_service),
):
    return assistants.create(friendly_name)


@router.post(
    "/{api_v}/Accounts/{account_id}/IncomingPhoneNumbers.json",
    response_model=PhoneNumberResponse,
)
async def create_incoming_phone_number(
    api_v: str,
    account_id: str,
    phone_numbers: PhoneNumberService = Depends(get_phone_number_service),
):
    return phone_numbers.provision()
