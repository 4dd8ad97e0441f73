"""Loading of check plans from YAML documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from checks.dsl import TestPlan, UnknownAction, build_plan

from .errors import ConfigLoadError

log = logging.getLogger(__name__)


def parse_plan(data: Any, *, source: str = "<memory>") -> TestPlan:
    """Build a plan from an already deserialized document.

    The document is either a list of step entries or a mapping holding
    them under ``steps``. An empty document is an empty plan.
    """

    if data is None:
        return TestPlan()
    if isinstance(data, dict) and "steps" in data:
        data = data["steps"] or []
    if not isinstance(data, list):
        raise ConfigLoadError(
            f"Plan document {source} must be a list of steps, got {type(data).__name__}",
            details={"path": source},
        )
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigLoadError(
                f"Step #{idx} in {source} must be a mapping, got {type(entry).__name__}",
                details={"path": source, "index": idx},
            )
    try:
        plan = build_plan(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid step in {source}: {exc}", details={"path": source}) from exc

    for step in plan:
        if isinstance(step.action, UnknownAction):
            log.warning("Step '%s' has no navigate/input/click action (keys: %s)", step.label, ", ".join(step.action.keys) or "none")
    return plan


def load_plan(path: Path) -> TestPlan:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigLoadError(f"Failed to read config file {path}: {exc}", details={"path": str(path)}) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Failed to parse config data in {path}: {exc}", details={"path": str(path)}) from exc
    plan = parse_plan(data, source=str(path))
    log.info("Loaded %d step(s) from %s", len(plan), path)
    return plan
