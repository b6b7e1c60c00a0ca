"""
Shared pytest fixtures for batchguard tests.

This module provides:
- Settings/logging cleanup fixtures for test isolation
- Verification contexts with deterministic host identity
- A small definition table for resource-verifier tests

Usage:
    Fixtures are auto-discovered by pytest; request them as arguments.

    def test_hold(job_ctx):
        assert verify_hold(job_ctx, AttributeValue("Hold_Types", "u")).is_ok()
"""

from collections.abc import Callable, Generator
from pathlib import Path
import sys

import pytest

# Ensure batchguard package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from batchguard.core.enums import ObjectKind, RequestKind
from batchguard.core.logging import reset_logging
from batchguard.core.settings import clear_settings_cache
from batchguard.verification.context import VerificationContext


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_cache_fixture() -> Generator[None, None, None]:
    """Drop cached settings so env overrides in one test never leak."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def clean_logging_fixture() -> Generator[None, None, None]:
    """Undo any structlog configuration a test (or the CLI) installed."""
    yield
    reset_logging()


# =============================================================================
# Context Fixtures
# =============================================================================


def _fake_resolver(table: dict[str, str]) -> Callable[[str], str]:
    def resolve(host: str) -> str:
        try:
            return table[host.lower()]
        except KeyError:
            raise OSError(f"unknown host {host}") from None

    return resolve


@pytest.fixture
def make_ctx() -> Callable[..., VerificationContext]:
    """Factory for contexts with a fixed host identity and fake DNS."""

    def factory(
        request: RequestKind = RequestKind.QUEUE_JOB,
        object_kind: ObjectKind = ObjectKind.JOB,
        **overrides,
    ) -> VerificationContext:
        values = {
            "server_name": "svr.example.com",
            "local_host": "login01",
            "working_directory": "/home/alice",
            "resolve_host": _fake_resolver(
                {
                    "node01.example.com": "node01.example.com",
                    "node02": "node02.example.com",
                }
            ),
        }
        values.update(overrides)
        return VerificationContext(request=request, object_kind=object_kind, **values)

    return factory


@pytest.fixture
def job_ctx(make_ctx) -> VerificationContext:
    """Context for a job submission."""
    return make_ctx(RequestKind.QUEUE_JOB)


@pytest.fixture
def select_ctx(make_ctx) -> VerificationContext:
    """Context for a select (query) request."""
    return make_ctx(RequestKind.SELECT_JOBS)


@pytest.fixture
def status_ctx(make_ctx) -> VerificationContext:
    """Context for a status request."""
    return make_ctx(RequestKind.STATUS_JOB)
