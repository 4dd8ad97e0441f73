"""Error taxonomy for the check exporter."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ExporterError(Exception):
    def __init__(self, message: str, *, code: str = "EXPORTER_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigLoadError(ExporterError):
    """Configuration or plan document is missing or malformed. Fatal."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG", details=details)


class SessionInitError(ExporterError):
    """Browser engine, browser, context or page could not be created. Fatal."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="SESSION", details=details)


class ActionError(ExporterError):
    """A single step failed; the run stops and is reported as failed."""

    def __init__(self, step_name: str, cause: Optional[BaseException] = None, *, message: Optional[str] = None):
        if message is None:
            message = (str(cause) or type(cause).__name__) if cause is not None else "step failed"
        super().__init__(message, code="ACTION", details={"step": step_name})
        self.step_name = step_name
        self.cause = cause
