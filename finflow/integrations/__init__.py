"""Third-party service integrations."""

from finflow.integrations.sentry import init_sentry, set_user

__all__ = ["init_sentry", "set_user"]
