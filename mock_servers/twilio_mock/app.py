"""Twilio API Mock Server.

FastAPI application implementing the slice of the Twilio Chat, Autopilot
and REST APIs a chat widget needs, so it can be tested against local,
deterministic responses.

Start with:
    uvicorn mock_servers.twilio_mock.app:app --port 4567
or:
    python -m mock_servers.twilio_mock
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mock_servers.twilio_mock.config import get_settings
from mock_servers.twilio_mock.db import InMemoryStore, get_store
from mock_servers.twilio_mock.errors import register_error_handlers
from mock_servers.twilio_mock.routes.autopilot import router as autopilot_router
from mock_servers.twilio_mock.routes.js_api import router as js_api_router
from mock_servers.twilio_mock.routes.rest import router as rest_router
from mock_servers.twilio_mock.routes.sdk import router as sdk_router

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Twilio API Mock",
    description="Mock implementation of Twilio Chat, Autopilot and REST APIs for chat widget testing",
    version="1.0.0-mock",
)

# CORS: the SDK is loaded by pages served from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes
app.include_router(sdk_router)
app.include_router(js_api_router)
app.include_router(autopilot_router)
app.include_router(rest_router)


@app.get("/")
async def root():
    return {
        "type": "mock",
        "name": "Twilio API Mock",
        "version": "1.0.0",
        "endpoints": [
            "/sdk/js/chat/v3.3/twilio-chat.min.js",
            "/js_api/channels/{channel}",
            "/js_api/channels/{channel}/messages",
            "/autopilot/update",
            "/v2/Services/{assistant_id}/Channels/{visitor_id}",
            "/v1/Assistants",
            "/{api_v}/Accounts/{account_id}/IncomingPhoneNumbers.json",
        ],
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/__store__")
async def dump_store(store: InMemoryStore = Depends(get_store)):
    """Everything the mock currently remembers (for test assertions)."""
    return store.snapshot()
