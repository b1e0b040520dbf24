"""Sentry integration for error tracking and performance monitoring.

Sentry is initialized in the CLI callback after logging setup. The DSN
comes from VIZIER_TAP_SENTRY_DSN; without it the SDK stays disabled.
"""

import os

import sentry_sdk

from vizier_tap.__about__ import __version__

SENTRY_DSN_ENV = "VIZIER_TAP_SENTRY_DSN"


def setup_sentry(environment: str = "local") -> bool:
    """Initialize Sentry; returns False when no DSN is configured."""
    dsn = os.environ.get(SENTRY_DSN_ENV)
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=0.03,
        environment=environment,
        release=__version__,
        attach_stacktrace=True,
        send_default_pii=False,
    )
    return True
