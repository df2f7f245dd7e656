"""
Pytest fixtures for PDF generator tests.
"""

import os

# IMPORTANT: Set environment variables BEFORE any imports from pdf_generator
# so the cached settings and the module-level app pick them up.
os.environ["PLAYWRIGHT_SERVICE_SECRET"] = "test-secret-key-1234"
os.environ["PRINT_SETTLE_MS"] = "0"
os.environ["LOG_LEVEL"] = "INFO"

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from pdf_generator.app import create_app
from pdf_generator.config import PdfServiceSettings
from pdf_generator.models import RenderOptions


TEST_SECRET = "test-secret-key-1234"
FAKE_PDF = b"%PDF-1.4 fake pdf content"


class FakeSession:
    """Records every call made on it; optionally fails at a given step."""

    def __init__(self, calls: List[str], fail_on: Dict[str, Exception], pdf: bytes):
        self.calls = calls
        self.fail_on = fail_on
        self.pdf = pdf
        self.close_count = 0
        self.navigate_args = None
        self.selector_args = None
        self.render_options: Optional[RenderOptions] = None
        self.settle_ms = None

    def _step(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on[name]

    async def navigate(self, url, wait_until="networkidle", timeout_ms=30000):
        self.navigate_args = (url, wait_until, timeout_ms)
        self._step("navigate")

    async def wait_for_selector(self, selector, timeout_ms=10000):
        self.selector_args = (selector, timeout_ms)
        self._step("wait_for_selector")

    async def emulate_print(self, settle_ms=500):
        self.settle_ms = settle_ms
        self._step("emulate_print")

    async def render(self, options):
        self.render_options = options
        self._step("render")
        return self.pdf

    async def close(self):
        self.close_count += 1
        self._step("close")


class FakeController:
    """Stand-in for BrowserController that hands out FakeSessions."""

    def __init__(self, fail_on: Optional[Dict[str, Exception]] = None, pdf: bytes = FAKE_PDF):
        self.fail_on = fail_on or {}
        self.pdf = pdf
        self.calls: List[str] = []
        self.sessions: List[FakeSession] = []

    @property
    def launch_count(self) -> int:
        return len(self.sessions) + self.calls.count("launch_failed")

    async def launch(self):
        if "launch" in self.fail_on:
            self.calls.append("launch_failed")
            raise self.fail_on["launch"]
        self.calls.append("launch")
        session = FakeSession(self.calls, self.fail_on, self.pdf)
        self.sessions.append(session)
        return session


@pytest.fixture
def settings():
    """Settings with a configured secret and no print settle delay."""
    return PdfServiceSettings(
        playwright_service_secret=TEST_SECRET,
        print_settle_ms=0,
    )


@pytest.fixture
def controller():
    return FakeController()


@pytest.fixture
def client(settings, controller):
    """Test client whose requests look internal (no X-Forwarded-For)."""
    return TestClient(create_app(settings, controller=controller))


@pytest.fixture
def external_headers():
    """Headers of a request that came through the public proxy."""
    return {"X-Forwarded-For": "203.0.113.7"}


@pytest.fixture
def auth_headers(external_headers):
    """External request carrying the correct bearer token."""
    return {**external_headers, "Authorization": f"Bearer {TEST_SECRET}"}


@pytest.fixture
def make_controller():
    """Factory for FakeControllers with custom failure points."""
    return FakeController


@pytest.fixture
def fake_pdf():
    return FAKE_PDF
