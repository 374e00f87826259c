"""Turn the raw stdin payload into a fully defaulted ``StatusInput``."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from .json_models import StatusPayload
from .models import DEFAULT_CONTEXT_WINDOW_SIZE, StatusInput

logger = logging.getLogger(__name__)

BACKGROUND_TASK_FIELDS = ("background_tasks", "running_agents", "active_tasks")


class StatusInputError(ValueError):
    """Raised when the payload is not a JSON object."""


def _to_int(value: float | None) -> int:
    """Truncate toward zero, treating a missing value as 0."""
    return int(value) if value is not None else 0


def _list_length(value: Any) -> int:
    return len(value) if isinstance(value, list) else 0


def _is_set(value: Any) -> bool:
    # An empty list counts as set: it still shadows the fallback fields.
    if value is None or value is False:
        return False
    if isinstance(value, int | float) and value == 0:
        return False
    return value != ""


def _background_task_count(payload: StatusPayload) -> int:
    for name in BACKGROUND_TASK_FIELDS:
        value = getattr(payload, name)
        if _is_set(value):
            return _list_length(value)
    return 0


def normalize_payload(data: Any) -> StatusInput:
    """Build a ``StatusInput`` from already decoded JSON.

    Args:
        data: Decoded JSON value

    Returns:
        Normalized status input with every numeric field defaulted

    Raises:
        StatusInputError: If the value is not a JSON object
    """
    if not isinstance(data, dict):
        raise StatusInputError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        payload = StatusPayload.model_validate(data)
    except ValidationError as e:
        raise StatusInputError(str(e)) from e

    cw = payload.context_window
    window_size = _to_int(cw.context_window_size)
    if window_size <= 0:
        window_size = DEFAULT_CONTEXT_WINDOW_SIZE

    until_compact = cw.until_compact if cw.until_compact is not None else cw.until_auto_compact

    return StatusInput(
        working_directory=payload.workspace.current_dir or payload.cwd,
        model_name=payload.model.display_name,
        total_input_tokens=_to_int(cw.total_input_tokens),
        total_output_tokens=_to_int(cw.total_output_tokens),
        cache_read_tokens=_to_int(cw.current_usage.cache_read_input_tokens),
        context_window_size=window_size,
        precalculated_percentage=cw.used_percentage,
        remaining_percentage=cw.remaining_percentage,
        until_compact_percentage=until_compact,
        cost_usd=payload.cost.total_cost_usd,
        skills_count=_list_length(payload.context.skills),
        agents_count=_list_length(payload.context.agents),
        mcp_tools_count=_list_length(payload.context.mcp_tools),
        background_task_count=_background_task_count(payload),
    )


def parse_status_input(raw: str) -> StatusInput:
    """Decode and normalize the raw stdin text.

    Raises:
        StatusInputError: If the text is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.debug("Invalid JSON on stdin: %s", e)
        raise StatusInputError(f"Invalid JSON input: {e}") from e
    return normalize_payload(data)
