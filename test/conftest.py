# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Bangladesh Income Tax API test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from bdtax.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ── Sample data fixtures ─────────────────────────────────────────────────

@pytest.fixture
def minimum_tax_request():
    """50,000/month in 2025-2026 — lands on the ৳5,000 minimum tax."""
    return {
        "monthlyGrossSalary": 50_000,
        "annualBonuses": 0,
        "incomeYear": "2025-2026",
        "taxpayerCategory": "men",
    }


@pytest.fixture
def rebate_request():
    """1 lakh/month + 2 lakh bonus with a 3 lakh investment, 2024-2025 rules."""
    return {
        "monthlyGrossSalary": 100_000,
        "annualBonuses": 200_000,
        "includeInvestments": True,
        "totalAnnualInvestment": 300_000,
        "incomeYear": "2024-2025",
        "taxpayerCategory": "men",
    }
