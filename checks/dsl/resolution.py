"""Resolution of indirect configuration values."""

from __future__ import annotations

import os
from typing import Mapping, Optional

ENV_PREFIX = "env://"


def is_indirect(raw: Optional[str]) -> bool:
    return bool(raw) and raw.startswith(ENV_PREFIX)


def resolve_value(raw: Optional[str], environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the effective value of ``raw``.

    ``env://NAME`` reads ``NAME`` from the process environment at call time
    and yields ``""`` when it is unset. Anything else is returned unchanged.
    """

    if raw is None:
        return ""
    if not raw.startswith(ENV_PREFIX):
        return raw
    source = os.environ if environ is None else environ
    return source.get(raw[len(ENV_PREFIX):], "")
