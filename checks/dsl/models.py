"""Typed models for check steps and their decoded actions."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterator, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Step(BaseModel):
    """One entry of a check plan as written in the plan document.

    Every key other than ``name`` belongs to the action map, so both
    ``{"name": "go", "navigate": "https://example.com"}`` and the nested
    ``{"name": "go", "action": {"navigate": "https://example.com"}}`` are
    accepted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ""
    action: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_inline_keys(cls, value: Any) -> Any:
        if isinstance(value, Step) or not isinstance(value, dict):
            return value
        data = dict(value)
        name = data.pop("name", "")
        nested = data.pop("action", None)
        action: Dict[str, Any] = {}
        if isinstance(nested, dict):
            action.update(nested)
        elif nested is not None:
            # ``action`` used as a plain keyword rather than a nested map.
            action["action"] = nested
        action.update(data)
        return {"name": "" if name is None else name, "action": action}

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value

    @field_validator("action", mode="before")
    @classmethod
    def _coerce_values(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        coerced: Dict[str, str] = {}
        for key, raw in value.items():
            if raw is None:
                coerced[str(key)] = ""
            elif isinstance(raw, bool):
                coerced[str(key)] = "true" if raw else "false"
            elif isinstance(raw, (str, int, float)):
                coerced[str(key)] = str(raw)
            else:
                raise ValueError(f"action value for '{key}' must be a scalar, got {type(raw).__name__}")
        return coerced


class ActionBase(BaseModel):
    """Base class for decoded step actions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    __action_name__: ClassVar[str]

    @property
    def action_name(self) -> str:
        return self.__action_name__

    def describe(self) -> Dict[str, Any]:
        """Loggable view of the action; input text stays unresolved."""
        data = self.model_dump(exclude={"type"})
        data["type"] = self.__action_name__
        return data


class NavigateAction(ActionBase):
    __action_name__ = "navigate"

    type: Literal["navigate"] = "navigate"
    url: str


class InputAction(ActionBase):
    __action_name__ = "input"

    type: Literal["input"] = "input"
    selector: str = ""
    # Raw value; ``env://NAME`` is resolved when the step runs.
    text: str = ""


class ClickAction(ActionBase):
    __action_name__ = "click"

    type: Literal["click"] = "click"
    selector: str


class UnknownAction(ActionBase):
    """Step whose action map names none of the known keywords."""

    __action_name__ = "unknown"

    type: Literal["unknown"] = "unknown"
    keys: Tuple[str, ...] = ()


ActionTypes = Union[NavigateAction, InputAction, ClickAction, UnknownAction]


class PlanStep(BaseModel):
    """A step paired with its decoded action."""

    model_config = ConfigDict(frozen=True)

    name: str
    action: ActionTypes = Field(discriminator="type")
    source: Step

    @property
    def label(self) -> str:
        return self.name or f"<unnamed {self.action.action_name}>"


class TestPlan(BaseModel):
    """Ordered, read-only list of steps. Order is execution order."""

    # Not a pytest test class despite the name.
    __test__ = False

    model_config = ConfigDict(frozen=True)

    steps: Tuple[PlanStep, ...] = ()

    def __iter__(self) -> Iterator[PlanStep]:  # type: ignore[override]
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def names(self) -> List[str]:
        return [step.name for step in self.steps]
