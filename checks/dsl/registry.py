"""Decoding of raw step action maps into typed actions."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Tuple

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

# Priority order: the first keyword carrying a non-empty value wins.
ACTION_KEYWORDS: Tuple[str, ...] = ("navigate", "input", "click")


def _navigate(action: Mapping[str, str]) -> NavigateAction:
    return NavigateAction(url=action["navigate"])


def _input(action: Mapping[str, str]) -> InputAction:
    return InputAction(selector=action.get("selector", ""), text=action.get("text", ""))


def _click(action: Mapping[str, str]) -> ClickAction:
    return ClickAction(selector=action["click"])


_DECODERS: Dict[str, Callable[[Mapping[str, str]], ActionTypes]] = {
    "navigate": _navigate,
    "input": _input,
    "click": _click,
}


def decode_action(action: Mapping[str, str]) -> ActionTypes:
    """Return the typed action described by ``action``.

    The result does not depend on key order in the mapping. Maps without a
    recognised keyword decode to :class:`UnknownAction`.
    """

    for keyword in ACTION_KEYWORDS:
        if action.get(keyword):
            return _DECODERS[keyword](action)
    return UnknownAction(keys=tuple(sorted(action)))


def decode_step(step: Step | Mapping[str, Any]) -> PlanStep:
    if not isinstance(step, Step):
        step = Step.model_validate(step)
    return PlanStep(name=step.name, action=decode_action(step.action), source=step)


def build_plan(steps: Iterable[Step | Mapping[str, Any]]) -> TestPlan:
    return TestPlan(steps=tuple(decode_step(step) for step in steps))
