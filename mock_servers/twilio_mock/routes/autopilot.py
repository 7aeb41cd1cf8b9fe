"""Autopilot schema endpoint.

Implements:
    POST /autopilot/update   body: {"schema": "<JSON-encoded object>"}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from mock_servers.twilio_mock.deps import get_autopilot_service
from mock_servers.twilio_mock.models import AutopilotUpdateRequest, OkResponse
from mock_servers.twilio_mock.services import AutopilotService

router = APIRouter(prefix="/autopilot", tags=["Autopilot"])


@router.post("/update", response_model=OkResponse)
async def update_schema(
    body: AutopilotUpdateRequest,
    autopilot: AutopilotService = Depends(get_autopilot_service),
):
    # The body is JSON and its "schema" field is JSON again
    autopilot.update_schema(body.schema_json)
    return OkResponse()
