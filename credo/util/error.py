"""Errors raised while wiring components from settings."""


class ConfigurationError(Exception):
    """Settings cannot produce a working component.

    Raised at container build time, e.g. for an OAuth provider with
    credentials but no callback URL.
    """
