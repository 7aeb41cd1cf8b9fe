"""Chat SDK asset endpoint.

Implements:
    GET /sdk/js/chat/v3.3/twilio-chat.min.js
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter, Depends
from starlette.responses import Response

from mock_servers.twilio_mock.config import MockSettings, get_settings

router = APIRouter(tags=["SDK"])

_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"
_HOST_PLACEHOLDER = "{{TWILIO_HOST}}"
JAVASCRIPT_CONTENT_TYPE = "text/javascript;charset=utf-8"


@lru_cache(maxsize=1)
def _chat_sdk_template() -> str:
    return (_STATIC_DIR / "twilio-chat.min.js").read_text(encoding="utf-8")


def render_chat_sdk(twilio_host: str) -> str:
    return _chat_sdk_template().replace(_HOST_PLACEHOLDER, twilio_host)


@router.get("/sdk/js/chat/v3.3/twilio-chat.min.js")
async def chat_sdk(settings: MockSettings = Depends(get_settings)):
    # Explicit header so Starlette does not append its own "; charset=utf-8"
    return Response(
        content=render_chat_sdk(settings.twilio_host),
        headers={"content-type": JAVASCRIPT_CONTENT_TYPE},
    )
