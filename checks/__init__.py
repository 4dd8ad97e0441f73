"""Declarative browser check definitions."""

from .dsl import models, registry
from .dsl.resolution import resolve_value

__all__ = ["models", "registry", "resolve_value"]
