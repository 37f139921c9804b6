"""Base class for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure components that tests can swap for mocks
Component = Literal["mail", "oauth", "persistence"]


class ProviderBase(Provider):
    """Provider with mock-selection metadata.

    Attributes:
        __mock_component__: Component this provider family implements, None
            for config, domain and application providers (never mocked)
        __is_mock__: True on the test implementation of a component
        __depends_on__: Components that must also be real when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[Component]] = frozenset()
