"""Twilio API models for the mock server.

Based on the Programmable Chat JS API, Autopilot and the REST API:
https://www.twilio.com/docs/api

Records are stored in the key-value store as plain dicts
(``model_dump()``), so tests and seed code can write raw values directly.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Stored records ---

class ChannelRecord(BaseModel):
    name: str
    customer_id: str
    chat_id: str


class MessageRecord(BaseModel):
    body: str
    author: Optional[str] = None


class ChatbotRecord(BaseModel):
    friendly_name: Optional[str] = None
    assistant_sid: str
    unique_name: str
    phone_number: Optional[str] = None
    phone_number_sid: Optional[str] = None


# --- Token grants ---

class ChatGrants(BaseModel):
    identity: str
    service_sid: str


# --- Request bodies ---

class PostMessageRequest(BaseModel):
    message: str


class AutopilotUpdateRequest(BaseModel):
    """``schema`` is itself a JSON-encoded string."""

    model_config = ConfigDict(populate_by_name=True)

    schema_json: str = Field(alias="schema")


# --- Responses ---

class ChannelResponse(BaseModel):
    name: str


class LatestMessageResponse(BaseModel):
    message: Any = None


class OkResponse(BaseModel):
    ok: bool = True


class ServiceChannelResponse(BaseModel):
    unique_name: str = "hello"
    sid: str = "hello_sid"


class AssistantResponse(BaseModel):
    sid: str
    unique_name: str


class PhoneNumberResponse(BaseModel):
    phone_number: str
    sid: str
