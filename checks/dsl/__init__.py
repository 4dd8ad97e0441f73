"""Typed step DSL for synthetic browser checks."""

from .models import (
    ActionTypes,
    ClickAction,
    InputAction,
    NavigateAction,
    PlanStep,
    Step,
    TestPlan,
    UnknownAction,
)
from .registry import ACTION_KEYWORDS, build_plan, decode_action, decode_step
from .resolution import ENV_PREFIX, is_indirect, resolve_value

__all__ = [
    "ACTION_KEYWORDS",
    "ENV_PREFIX",
    "ActionTypes",
    "ClickAction",
    "InputAction",
    "NavigateAction",
    "PlanStep",
    "Step",
    "TestPlan",
    "UnknownAction",
    "build_plan",
    "decode_action",
    "decode_step",
    "is_indirect",
    "resolve_value",
]
