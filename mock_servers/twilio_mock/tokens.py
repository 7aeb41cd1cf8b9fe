"""Access token decoding for the Twilio mock.

Real Twilio access tokens are JWTs signed with an API key secret. The mock
has no secret to check against, so it only reads the claims it routes on:

    grants.identity          -> who is chatting
    grants.chat.service_sid  -> which Chat service the channel belongs to

Signatures and the ``alg`` header are NOT verified. This is a test double;
never reuse it where the token actually has to be trusted.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Protocol

import jwt
from pydantic import ValidationError

from mock_servers.twilio_mock.errors import MalformedTokenError
from mock_servers.twilio_mock.models import ChatGrants

logger = logging.getLogger(__name__)


class TokenDecoder(Protocol):
    def decode(self, token: str) -> ChatGrants: ...


class UnverifiedTokenDecoder:
    """Reads chat grants from any JWT without checking its signature."""

    def claims(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False},
            )
        except jwt.InvalidTokenError as e:
            logger.warning("Undecodable access token: %s", e)
            raise MalformedTokenError(f"Token is not a valid JWT: {e}") from e
        if not isinstance(payload, dict):
            raise MalformedTokenError("Token payload is not an object")
        return payload

    def decode(self, token: str) -> ChatGrants:
        payload = self.claims(token)
        grants = payload.get("grants")
        if not isinstance(grants, dict):
            raise MalformedTokenError("Token has no 'grants' claim")
        chat = grants.get("chat")
        if not isinstance(chat, dict):
            raise MalformedTokenError("Token has no 'grants.chat' claim")
        try:
            return ChatGrants(
                identity=grants.get("identity"),
                service_sid=chat.get("service_sid"),
            )
        except ValidationError as e:
            raise MalformedTokenError(
                "Token grants must carry 'identity' and 'chat.service_sid' strings"
            ) from e
