"""
Settings for the verification engine.

Process-wide limits the verifiers consult (the license ceiling, buffer limits
for expanded values, the server name used to qualify job ids) are read once
from ``BATCHGUARD_*`` environment variables or a ``.env`` file and injected
into each :class:`~batchguard.verification.context.VerificationContext`.
Nothing reads them from a mutable global at verification time.

Examples:
    >>> from batchguard.core.settings import VerifierSettings
    >>> VerifierSettings(max_licenses=64).max_licenses
    64

Tags:
    settings, configuration, pydantic, environment, batchguard

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import socket

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VerifierSettings(BaseSettings):
    """Verification engine configuration.

    Fields
    ──────
    max_licenses     : Upper bound for pbs_license_min / pbs_license_max
    depend_max_len   : Longest accepted expanded dependency list
    path_max_len     : Longest accepted normalized output/error path
    job_name_max_len : Longest accepted job or reservation name
    max_array_size   : Exclusive upper bound for array indices
    server_name      : Server used to qualify bare job ids in dependencies
    acl_host_check   : Resolve manager/operator ACL hosts (off under Kerberos)
    log_level        : Structlog log level
    log_format       : "json" or "console"
    """

    model_config = SettingsConfigDict(
        env_prefix="BATCHGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Limits ───────────────────────────────────────────────────
    max_licenses: int = Field(default=10_000_000, ge=0)
    depend_max_len: int = Field(default=2040, gt=0)
    path_max_len: int = Field(default=1024, gt=0)
    job_name_max_len: int = Field(default=236, gt=0)
    max_array_size: int = Field(default=10_000, gt=0)

    # ── Host identity ────────────────────────────────────────────
    server_name: str = Field(default_factory=socket.gethostname)
    acl_host_check: bool = Field(default=True)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, VerifierSettings] = {}


def get_settings(*, _force_reload: bool = False) -> VerifierSettings:
    """Load, validate, and cache a :class:`VerifierSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = VerifierSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
