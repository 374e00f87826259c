"""Pydantic models for the JSON payload Claude Code sends on stdin.

The payload is external data we do not control, so every model ignores
unknown fields and every leaf is coerced leniently: a value of the wrong
type becomes ``None`` instead of failing validation. Only a payload that is
not a JSON object at all is rejected (see ``input_normalizer``).
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def coerce_number(value: Any) -> float | None:
    """Coerce a JSON value to a finite float, or None when it is not numeric."""
    if value is None:
        return None
    if isinstance(value, bool | int | float):
        number = float(value)
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_string(value: Any) -> str | None:
    """Keep non-empty strings, drop everything else."""
    if isinstance(value, str) and value:
        return value
    return None


def coerce_list(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


def coerce_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


LenientNumber = Annotated[float | None, BeforeValidator(coerce_number)]
LenientString = Annotated[str | None, BeforeValidator(coerce_string)]
LenientList = Annotated[list[Any] | None, BeforeValidator(coerce_list)]


class PayloadModel(BaseModel):
    """Base for payload sections: unknown fields ignored, immutable."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class WorkspaceInfo(PayloadModel):
    current_dir: LenientString = None


class ModelInfo(PayloadModel):
    display_name: LenientString = None


class CurrentUsage(PayloadModel):
    cache_read_input_tokens: LenientNumber = None


class ContextWindowInfo(PayloadModel):
    """The ``context_window`` section with token totals and percentages."""

    total_input_tokens: LenientNumber = None
    total_output_tokens: LenientNumber = None
    current_usage: Annotated[CurrentUsage, BeforeValidator(coerce_mapping)] = Field(default_factory=CurrentUsage)
    context_window_size: LenientNumber = None
    used_percentage: LenientNumber = None
    remaining_percentage: LenientNumber = None
    until_compact: LenientNumber = None
    until_auto_compact: LenientNumber = None


class CostInfo(PayloadModel):
    total_cost_usd: LenientNumber = None


class ContextInfo(PayloadModel):
    """The ``context`` section. Only the lengths of the lists are used."""

    skills: LenientList = None
    agents: LenientList = None
    mcp_tools: LenientList = None


class StatusPayload(PayloadModel):
    """Top-level stdin payload."""

    workspace: Annotated[WorkspaceInfo, BeforeValidator(coerce_mapping)] = Field(default_factory=WorkspaceInfo)
    cwd: LenientString = None
    model: Annotated[ModelInfo, BeforeValidator(coerce_mapping)] = Field(default_factory=ModelInfo)
    context_window: Annotated[ContextWindowInfo, BeforeValidator(coerce_mapping)] = Field(
        default_factory=ContextWindowInfo
    )
    cost: Annotated[CostInfo, BeforeValidator(coerce_mapping)] = Field(default_factory=CostInfo)
    context: Annotated[ContextInfo, BeforeValidator(coerce_mapping)] = Field(default_factory=ContextInfo)
    # Raw values: the first one that is set wins, even when it is an empty list.
    background_tasks: Any = None
    running_agents: Any = None
    active_tasks: Any = None


class UpdateCheckCache(PayloadModel):
    """Cache file written by the tracked tool's update check hook."""

    latest: LenientString = None
