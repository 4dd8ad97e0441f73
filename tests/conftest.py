"""Shared fixtures: repo root on sys.path and a recording browser session."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional, Set, Tuple

import pytest

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))


class StubLocator:
    def __init__(self, session: "StubSession", selector: str) -> None:
        self.session = session
        self.selector = selector

    async def fill(self, value: str) -> None:
        self.session.calls.append(("fill", self.selector, value))
        self.session.raise_if_failing(self.selector)

    async def click(self) -> None:
        self.session.calls.append(("click", self.selector))
        self.session.raise_if_failing(self.selector)


class StubSession:
    """Records every navigate/locate/fill/click call in order."""

    def __init__(self, fail_on: Optional[Set[str]] = None) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self.fail_on = set(fail_on or ())

    def raise_if_failing(self, target: str) -> None:
        if target in self.fail_on:
            raise RuntimeError(f"Timeout waiting for {target}")

    async def navigate(self, url: str) -> None:
        self.calls.append(("navigate", url))
        self.raise_if_failing(url)

    def locate(self, selector: str) -> StubLocator:
        self.calls.append(("locate", selector))
        return StubLocator(self, selector)

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


@pytest.fixture
def stub_session() -> StubSession:
    return StubSession()
