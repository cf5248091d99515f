"""Diagnostic channel for recoverable localization conditions.

Unsupported tags, missing bundles and failed loads are expected at runtime and
never reach the end user. They are logged for developers only; production
deployments (``LOCALESHELL_ENV=production``) suppress them entirely.
"""

from __future__ import annotations

import logging
import os

_ENVIRONMENT_VARIABLE = "LOCALESHELL_ENV"
_PRODUCTION = "production"


def diagnostics_enabled() -> bool:
    """Return ``True`` unless the process runs as a production build."""

    environment = os.getenv(_ENVIRONMENT_VARIABLE, "development")
    return environment.strip().lower() != _PRODUCTION


def report(logger: logging.Logger, level: int, message: str, *args: object) -> None:
    """Log ``message`` through ``logger`` when diagnostics are enabled."""

    if diagnostics_enabled():
        logger.log(level, "[i18n] " + message, *args)


__all__ = ["diagnostics_enabled", "report"]
