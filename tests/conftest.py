"""
Shared fixtures for DIVA backend tests.

The text-generation provider is never called: the ``get_text_generator``
dependency is overridden with ``FakeTextGenerator``, which returns canned
Markdown (or raises) so route tests are deterministic and offline.
"""
from __future__ import annotations

from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from diva.exceptions import UpstreamProviderError
from diva.main import app
from diva.services.llm_client import get_text_generator

SAMPLE_MARKDOWN = """\
# Developer Setup Guide
1 OVERVIEW
Welcome to **Inventory Tracker**, a *web-based* stock management system.
2 TOOLS & TECHNOLOGIES
Category | Tool/Technology
Backend | Spring Boot (Java 17)
Database | MySQL
3 PREREQUISITES
➢ **Java 17+ (JDK)** *Required for the Spring Boot backend.*
4 STEP-BY-STEP SETUP GUIDE
🟣 ***GitHub Repository Setup***
```
git clone https://github.com/acme/inventory-tracker.git
cd inventory-tracker
```
Visit https://github.com/acme/inventory-tracker for the source.
"""

FORM = {
    "appName": "Inventory Tracker",
    "description": "Tracks stock levels across warehouses.",
    "companyName": "Cebu Institute of Technology University",
    "backendTech": "Spring Boot",
    "frontendWebTech": "React",
    "database": "MySQL",
    "developers": "Ana Cruz\nBen Reyes",
    "projectManager": "Dr. Lim",
}


# ---------------------------------------------------------------------------
# Fake provider
# ---------------------------------------------------------------------------

class FakeTextGenerator:
    """Stands in for OpenAITextGenerator; records every prompt it receives."""

    def __init__(self, text: str = SAMPLE_MARKDOWN, error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def failing_generator() -> FakeTextGenerator:
    return FakeTextGenerator(
        error=UpstreamProviderError("Text generation provider returned HTTP 503", ["overloaded"])
    )


@pytest_asyncio.fixture
async def client(fake_generator: FakeTextGenerator) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the text generator
    dependency overridden by ``fake_generator``.
    """
    app.dependency_overrides[get_text_generator] = lambda: fake_generator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
