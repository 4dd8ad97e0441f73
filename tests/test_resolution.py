import pytest

from checks.dsl import ENV_PREFIX, is_indirect, resolve_value


@pytest.mark.parametrize("raw", ["", "plain", "https://example.com", "ENV://X", "env:/X", " env://X"])
def test_literal_values_are_unchanged(raw):
    assert resolve_value(raw) == raw


def test_env_reference_reads_current_environment(monkeypatch):
    monkeypatch.setenv("GREETING", "hi")
    assert resolve_value("env://GREETING") == "hi"
    monkeypatch.setenv("GREETING", "hello")
    assert resolve_value("env://GREETING") == "hello"


def test_missing_env_variable_resolves_to_empty(monkeypatch):
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
    assert resolve_value("env://NOT_SET_ANYWHERE") == ""


def test_explicit_environ_mapping():
    assert resolve_value(f"{ENV_PREFIX}USER", {"USER": "svc"}) == "svc"
    assert resolve_value(f"{ENV_PREFIX}", {"": "odd"}) == "odd"


def test_none_resolves_to_empty():
    assert resolve_value(None) == ""


def test_is_indirect():
    assert is_indirect("env://PASSWORD")
    assert not is_indirect("password")
    assert not is_indirect(None)
