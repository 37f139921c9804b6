"""Production container and its FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from credo.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with the production implementation of every component.

    Settings come from the environment (see credo.config).
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # FastapiProvider makes the Request available to request-scoped providers
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes use DishkaRoute."""
    setup_dishka(container, app)
