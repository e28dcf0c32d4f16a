# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Writes catalog JSON files into a per-test temporary data directory
# - Provides a controllable clock for cache expiry tests
# - Provides a TestClient wired to the temporary data directory
# =============================================================================

import json
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATA_DIR", "./tests/.no-data")

import pytest
from fastapi.testclient import TestClient

from lib.cache import TTLCache
from lib.data_loader import DataLoader


# =============================================================================
# Helpers
# =============================================================================

class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def write_json(path, data) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock():
    """A FakeClock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def sample_websites():
    """Three websites; the last one has no techStack."""
    return [
        {
            "id": "taskflow",
            "name": "TaskFlow",
            "url": "https://taskflow.example.com",
            "description": "Kanban-style project tracker",
            "screenshot": "/assets/screenshots/taskflow.png",
            "logo": "/assets/logos/taskflow.svg",
            "favicon": "/assets/favicons/taskflow.ico",
            "requiresAuth": True,
            "lastUpdated": "2025-01-27T10:00:00.000Z",
            "techStack": {
                "frontend": ["React", "TypeScript"],
                "backend": ["Node.js"],
                "database": ["PostgreSQL"],
                "deployment": ["Vercel"],
                "aiTools": [],
                "other": ["GitHub Actions"],
                "source": "2025-01-27T10:00:00Z",
            },
        },
        {
            "id": "recipe-box",
            "name": "Recipe Box",
            "url": "https://recipes.example.com",
            "description": "Recipe manager with pantry suggestions",
            "screenshot": "/assets/screenshots/recipe-box.png",
            "logo": "/assets/logos/recipe-box.svg",
            "favicon": "/assets/favicons/recipe-box.ico",
            "requiresAuth": False,
            "lastUpdated": "2025-01-20T08:30:00.000Z",
            "techStack": {
                "frontend": ["React", "Next.js"],
                "backend": ["Python"],
                "database": ["PostgreSQL"],
                "deployment": ["AWS"],
                "aiTools": ["OpenAI"],
                "other": [],
                "source": "2025-01-20T08:30:00Z",
            },
        },
        {
            "id": "pixel-notes",
            "name": "Pixel Notes",
            "url": "https://notes.example.com",
            "description": "Markdown notes with offline sync",
            "screenshot": "/assets/screenshots/pixel-notes.png",
            "logo": "/assets/logos/pixel-notes.svg",
            "favicon": "/assets/favicons/pixel-notes.ico",
            "requiresAuth": False,
            "lastUpdated": "2025-01-15T14:45:00.000Z",
        },
    ]


@pytest.fixture
def sample_credentials():
    """Credentials file content, keyed by website id."""
    return {
        "taskflow": {
            "websiteId": "taskflow",
            "method": "email",
            "username": "demo@example.com",
            "password": "secret-password",
        },
    }


@pytest.fixture
def sample_assets():
    """Asset metadata: taskflow has favicon + logo, recipe-box only a logo."""
    return [
        {
            "websiteId": "taskflow",
            "assetType": "favicon",
            "filePath": "/assets/favicons/taskflow.ico",
            "fileSize": 1150,
            "dimensions": {"width": 32, "height": 32},
            "format": "ico",
            "generatedAt": "2025-01-27T10:00:00.000Z",
            "optimized": True,
        },
        {
            "websiteId": "taskflow",
            "assetType": "logo",
            "filePath": "/assets/logos/taskflow.svg",
            "fileSize": 2048,
            "format": "svg",
            "optimized": True,
        },
        {
            "websiteId": "recipe-box",
            "assetType": "logo",
            "filePath": "/assets/logos/recipe-box.svg",
            "fileSize": 1800,
            "format": "svg",
        },
    ]


@pytest.fixture
def data_dir(tmp_path, sample_websites, sample_credentials, sample_assets):
    """Temporary data directory holding all three catalog files."""
    write_json(tmp_path / "websites.json", sample_websites)
    write_json(tmp_path / "auth-credentials.json", sample_credentials)
    write_json(tmp_path / "assets.json", sample_assets)
    return tmp_path


@pytest.fixture
def loader(data_dir, clock):
    """DataLoader over data_dir with a fresh 5-minute cache on the fake clock."""
    return DataLoader(data_dir=data_dir, cache=TTLCache(ttl_seconds=300, clock=clock))


@pytest.fixture
def make_client():
    """
    Build a TestClient whose routes use the given loader.

    Overrides are removed when the test finishes.
    """
    from app.dependencies import get_data_loader
    from app.main import app

    def _make(loader: DataLoader) -> TestClient:
        app.dependency_overrides[get_data_loader] = lambda: loader
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, loader):
    """TestClient over the sample data."""
    return make_client(loader)
