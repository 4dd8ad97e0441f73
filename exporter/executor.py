"""Sequential, fail-fast execution of check plans."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from checks.dsl import (
    ClickAction,
    InputAction,
    NavigateAction,
    PlanStep,
    TestPlan,
    UnknownAction,
    is_indirect,
    resolve_value,
)

from .errors import ActionError
from .session import SessionLike
from .structured_logging import StructuredLogger

log = logging.getLogger(__name__)


class RunState(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(slots=True)
class ActionOutcome:
    ok: bool
    action: str
    details: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "action": self.action, "details": self.details}


@dataclass(slots=True)
class ExecutionOutcome:
    state: RunState
    steps_run: int = 0
    failed_step: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.state is RunState.SUCCEEDED

    @property
    def value(self) -> float:
        return 1.0 if self.success else 0.0


class ActionDispatcher:
    """Runs one step against a browser session."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    async def execute(self, step: PlanStep, session: SessionLike) -> ActionOutcome:
        try:
            return await self._dispatch(step, session)
        except ActionError:
            raise
        except Exception as exc:
            raise ActionError(step.label, exc) from exc

    async def _dispatch(self, step: PlanStep, session: SessionLike) -> ActionOutcome:
        action = step.action
        if isinstance(action, NavigateAction):
            return await self._navigate(action, session)
        if isinstance(action, InputAction):
            return await self._input(action, session)
        if isinstance(action, ClickAction):
            return await self._click(action, session)
        if isinstance(action, UnknownAction):
            return self._unknown(step, action)
        raise ActionError(step.label, message=f"Unsupported action {action.action_name}")

    async def _navigate(self, action: NavigateAction, session: SessionLike) -> ActionOutcome:
        await session.navigate(action.url)
        return ActionOutcome(ok=True, action=action.action_name, details={"url": action.url})

    async def _input(self, action: InputAction, session: SessionLike) -> ActionOutcome:
        text = resolve_value(action.text)
        locator = session.locate(action.selector)
        await locator.fill(text)
        details: Dict[str, Any] = {"selector": action.selector}
        if is_indirect(action.text):
            details["text_from"] = action.text
        return ActionOutcome(ok=True, action=action.action_name, details=details)

    async def _click(self, action: ClickAction, session: SessionLike) -> ActionOutcome:
        locator = session.locate(action.selector)
        await locator.click()
        return ActionOutcome(ok=True, action=action.action_name, details={"selector": action.selector})

    def _unknown(self, step: PlanStep, action: UnknownAction) -> ActionOutcome:
        if self.strict:
            raise ActionError(
                step.label,
                message=f"Unrecognised action (keys: {', '.join(action.keys) or 'none'})",
            )
        log.debug("Step '%s' has no recognised action, skipping", step.label)
        return ActionOutcome(ok=True, action=action.action_name, details={"skipped": True})


class RunExecutor:
    """Executes a plan in order and stops at the first failing step."""

    def __init__(
        self,
        dispatcher: Optional[ActionDispatcher] = None,
        *,
        events: Optional[StructuredLogger] = None,
    ) -> None:
        self.dispatcher = dispatcher or ActionDispatcher()
        self.events = events

    async def run(self, plan: TestPlan, session: SessionLike) -> ExecutionOutcome:
        outcome = ExecutionOutcome(state=RunState.RUNNING)
        started = time.monotonic()
        for step in plan:
            try:
                result = await self.dispatcher.execute(step, session)
            except ActionError as exc:
                outcome.steps_run += 1
                log.error("Failed to execute step '%s': %s", step.label, exc)
                self._record(step, ok=False, error=str(exc))
                outcome.state = RunState.FAILED
                outcome.failed_step = step.name
                outcome.error = str(exc)
                break
            outcome.steps_run += 1
            self._record(step, ok=True, details=result.details)
        else:
            outcome.state = RunState.SUCCEEDED

        log.info(
            "Test execution completed: %s (%d/%d steps, %.2fs)",
            outcome.state.value,
            outcome.steps_run,
            len(plan),
            time.monotonic() - started,
        )
        return outcome

    def _record(self, step: PlanStep, *, ok: bool, error: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        if self.events is None:
            return
        try:
            self.events.log_event(name=step.name, action=step.action.describe(), ok=ok, error=error, details=details)
        except OSError as exc:
            log.warning("Failed to write event for step '%s': %s", step.label, exc)
