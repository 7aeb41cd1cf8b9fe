"""Chat JS API endpoints used by the served SDK.

Implements:
    GET  /js_api/channels/{channel}?token=...
    GET  /js_api/channels/{channel}/messages
    POST /js_api/channels/{channel}/messages
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from mock_servers.twilio_mock.deps import (
    get_channel_service,
    get_message_service,
    get_token_decoder,
)
from mock_servers.twilio_mock.models import (
    ChannelResponse,
    LatestMessageResponse,
    OkResponse,
    PostMessageRequest,
)
from mock_servers.twilio_mock.services import ChannelService, MessageService
from mock_servers.twilio_mock.tokens import TokenDecoder

router = APIRouter(prefix="/js_api/channels", tags=["Chat JS API"])


@router.get("/{channel}", response_model=ChannelResponse)
async def get_channel(
    channel: str,
    token: str = Query(..., description="Chat access token (JWT)"),
    decoder: TokenDecoder = Depends(get_token_decoder),
    channels: ChannelService = Depends(get_channel_service),
):
    grants = decoder.decode(token)
    name = channels.get_or_create(channel, grants.identity, grants.service_sid)
    return ChannelResponse(name=name)


@router.get("/{channel}/messages", response_model=LatestMessageResponse)
async def get_latest_message(
    channel: str,
    messages: MessageService = Depends(get_message_service),
):
    return LatestMessageResponse(message=messages.list_latest(channel))


@router.post("/{channel}/messages", response_model=OkResponse)
async def post_message(
    channel: str,
    body: PostMessageRequest,
    messages: MessageService = Depends(get_message_service),
):
    messages.append(channel, body.message)
    return OkResponse()
