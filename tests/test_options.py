from __future__ import annotations

import logging

import pytest

from imgsource.config import config
from imgsource.logging_config import configure_logging
from imgsource.models import RetrievalOptions


def test_coerce_accepts_camel_case_mapping() -> None:
    options = RetrievalOptions.coerce(
        {
            "headers": {"Referer": "https://example.com"},
            "maxRedirects": 3,
            "requestOptions": {"timeout": 2},
            "unknown": True,
        }
    )

    assert options.headers == {"Referer": "https://example.com"}
    assert options.max_redirects == 3
    assert options.request_options == {"timeout": 2}
    assert options.native_fetch is None


def test_coerce_applies_overrides() -> None:
    base = RetrievalOptions(max_redirects=5)

    assert RetrievalOptions.coerce(base) is base
    assert RetrievalOptions.coerce(base, max_redirects=1).max_redirects == 1
    assert RetrievalOptions.coerce(None, native_fetch=True).native_fetch is True



def test_coerce_instance_accepts_camel_case_overrides() -> None:
    base = RetrievalOptions(headers={"A": "b"})

    options = RetrievalOptions.coerce(
        base, maxRedirects=3, requestOptions={"timeout": 2}, unknown=True
    )

    assert options.max_redirects == 3
    assert options.request_options == {"timeout": 2}
    assert options.headers == {"A": "b"}
    assert base.max_redirects is None


@pytest.mark.parametrize(
    ("value", "budget"),
    [(0, 0), (7, 7), (None, 20), (-1, 20), ("3", 20), (True, 20), (1.5, 20)],
)
def test_redirect_budget(value, budget: int) -> None:
    assert RetrievalOptions(max_redirects=value).redirect_budget == budget


def test_request_headers_merge_order(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "USER_AGENT", "tests/1.0")
    options = RetrievalOptions(
        headers={"Accept": "image/png"},
        request_options={"headers": {"Accept": "image/jpeg", "X-Token": "abc"}},
    )

    assert options.request_headers() == {
        "Accept": "image/png",
        "User-Agent": "tests/1.0",
        "X-Token": "abc",
    }


def test_client_options(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "HTTP_TIMEOUT", 3.0)

    assert RetrievalOptions().client_options() == {"timeout": 3.0}
    options = RetrievalOptions(
        request_options={"timeout": 1, "verify": False, "headers": {"A": "b"}}
    )
    assert options.client_options() == {"timeout": 1, "verify": False}


def test_configure_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    logger = logging.getLogger("imgsource")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "level", logger.level)
    monkeypatch.setattr(logger, "propagate", logger.propagate)

    configure_logging()
    configure_logging(debug=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


@pytest.mark.parametrize(
    ("env", "level"),
    [("warning", logging.WARNING), ("15", 15), ("bogus", logging.INFO)],
)
def test_configure_logging_reads_env(
    monkeypatch: pytest.MonkeyPatch, env: str, level: int
) -> None:
    monkeypatch.setenv("LOG_LEVEL", env)
    logger = logging.getLogger("imgsource")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "level", logger.level)
    monkeypatch.setattr(logger, "propagate", logger.propagate)

    assert configure_logging().level == level
