"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services hold the authentication rules that span the user, session and
    audit aggregates; they depend only on repository and collaborator
    interfaces, never on adapters.
    """
