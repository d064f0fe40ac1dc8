"""Shared test fixtures for the Spec Engine test suite."""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.shared.constants import VERSION
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware
from src.shared.models.catalog import ApiTemplate, Endpoint, FlattenedApiEntry
from src.shared.models.openapi import SuggestedApi, UseCase
from src.spec_engine.services.ai_refinement import ApiRefiner
from src.spec_engine.services.catalog import ServiceCatalog


class FakeCompletion:
    """Stand-in text-completion collaborator.

    Returns *payload* from every call, or raises *error* when given one.
    Prompts are recorded on ``calls``.
    """

    def __init__(
        self,
        payload: dict[str, Any] | None = None,
        error: Exception | None = None,
        configured: bool = True,
    ) -> None:
        self.payload = payload if payload is not None else {}
        self.error = error
        self.configured = configured
        self.calls: list[str] = []

    def complete(self, prompt: str, system_prompt: str | None = None) -> dict[str, Any]:
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog() -> ServiceCatalog:
    """A fresh catalog seeded with the built-in domains and templates."""
    return ServiceCatalog()


@pytest.fixture
def payment_template() -> ApiTemplate:
    return ApiTemplate(
        name="Payment Order",
        domain="Payment Order",
        description="Management of payment orders",
        endpoints=[
            Endpoint(path="/payment-order/initiate", method="POST", operation="Initiate"),
            Endpoint(
                path="/payment-order/{payment-order-id}/retrieve",
                method="GET",
                operation="Retrieve",
            ),
        ],
        coverage=["payment initiation"],
        limitations=["does not execute payments"],
    )


# ---------------------------------------------------------------------------
# Synthesizer fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def get_entry() -> FlattenedApiEntry:
    return FlattenedApiEntry(
        name="Payment Order - Retrieve",
        domain="Payment Order",
        description="Retrieve the status of a payment order",
        endpoint="/payment-order/{payment-order-id}/retrieve",
        method="GET",
    )


@pytest.fixture
def post_entry() -> FlattenedApiEntry:
    return FlattenedApiEntry(
        name="Payment Order - Initiate",
        domain="Payment Order",
        description="Initiate a new payment order",
        endpoint="/payment-order/initiate",
        method="POST",
    )


@pytest.fixture
def use_case() -> UseCase:
    return UseCase(
        id="uc-1",
        title="Instant cross-border payments",
        description="Customers send payments abroad from the mobile app",
        selected_domains=["Payment Order", "Customer Management"],
        suggested_apis=[
            SuggestedApi(
                name="Payment Order",
                domain="Payment Order",
                description="Management of payment orders",
                endpoints=[
                    Endpoint(
                        path="/payment-order/initiate",
                        method="POST",
                        operation="Initiate",
                        description="Initiate a new payment order",
                    ),
                    Endpoint(
                        path="/payment-order/{payment-order-id}/retrieve",
                        method="GET",
                        operation="Retrieve",
                        description="Retrieve a payment order",
                    ),
                ],
            ),
            SuggestedApi(
                name="Payment Tracking",
                domain="Payment Order",
                description="Tracking of payment progress",
                endpoints=[
                    Endpoint(
                        path="/payment-tracking/{tracking-id}/retrieve",
                        method="GET",
                        operation="Retrieve",
                    ),
                ],
            ),
            SuggestedApi(
                name="Customer Directory",
                domain="Customer Management",
                description="Central directory of customer information",
                endpoints=[
                    Endpoint(
                        path="/customer-directory/{customer-directory-entry-id}/update",
                        method="PUT",
                        operation="Update",
                    ),
                ],
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Application fixture
# ---------------------------------------------------------------------------


def build_app(catalog: ServiceCatalog, completion: FakeCompletion | None) -> FastAPI:
    """Build a standalone Spec Engine app around the given collaborators."""

    @asynccontextmanager
    async def lifespan(app):
        app.state.start_time = time.time()
        app.state.catalog = catalog
        app.state.completion = completion
        app.state.refiner = ApiRefiner(completion)
        yield

    test_app = FastAPI(title="Spec Engine", version=VERSION, lifespan=lifespan)
    test_app.add_middleware(TraceIDMiddleware)
    register_exception_handlers(test_app)

    from src.spec_engine.routers.health import router as health_router
    from src.spec_engine.routers.domains import router as domains_router
    from src.spec_engine.routers.apis import router as apis_router
    from src.spec_engine.routers.specs import router as specs_router

    test_app.include_router(health_router)
    test_app.include_router(domains_router)
    test_app.include_router(apis_router)
    test_app.include_router(specs_router)
    return test_app


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion(error=RuntimeError("collaborator offline"))


@pytest.fixture
def client(catalog: ServiceCatalog, fake_completion: FakeCompletion):
    """TestClient over a fresh catalog and a failing completion collaborator."""
    with TestClient(build_app(catalog, fake_completion)) as c:
        yield c


@pytest.fixture
def completion_factory():
    """Return the :class:`FakeCompletion` class for per-test configuration."""
    return FakeCompletion


@pytest.fixture
def app_factory():
    """Return :func:`build_app` for tests that need their own collaborators."""
    return build_app
