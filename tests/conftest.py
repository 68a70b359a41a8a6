# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up the test environment variables before any imports
# - Builds ConfigStore / Application / View instances against temporary
#   storage and template directories
# =============================================================================

import os
import sys
from pathlib import Path

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("VERSION", "0.0.0-test")

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import pytest

from core.application import Application
from core.config_store import ConfigStore
from core.models.environment import Environment
from core.models.response import ResponseBuffer

FIXTURES_DIRECTORY = REPO_ROOT / "tests" / "fixtures"
TEMPLATES_DIRECTORY = REPO_ROOT / "app" / "templates"
TRANSLATIONS_DIRECTORY = REPO_ROOT / "app" / "translations"

TEST_ROUTES = [
    ("home", "/"),
    ("member", "/members/{member_id}"),
    ("locale", "/locale/{locale}"),
]


# =============================================================================
# Builders
# =============================================================================

def make_config(tmp_path: Path, **overrides) -> ConfigStore:
    """ConfigStore with test defaults; dotted-key overrides via **{...}."""
    values = {
        "base.full_url": "http://example.test",
        "directory.assets": "assets",
        "directory.storage": str(tmp_path / "storage"),
        "directory.templates": str(TEMPLATES_DIRECTORY),
        "directory.fixtures": str(FIXTURES_DIRECTORY),
        "directory.translations": str(TRANSLATIONS_DIRECTORY),
        "gzip.enabled": False,
        "cookie.path": "/",
        "cookie.domain": "example.test",
        "cookie.secure": True,
        "trans.locale": "en_EN",
        "trans.fallback_locale": "en_EN",
        "router.use_httpd_rewrite": True,
    }
    values.update(overrides)
    return ConfigStore(values)


def make_application(tmp_path: Path, environment: Environment, **overrides) -> Application:
    """Application with the test routes registered."""
    application = Application(
        config=make_config(tmp_path, **overrides),
        environment=environment,
        base_directory=REPO_ROOT,
        version="1.2.3",
    )
    application.routing.register(TEST_ROUTES)
    return application


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def template_root(tmp_path):
    """
    Small template tree:

        templates/
            Actions/Index.html.j2
            Actions/Nested/Deep.html.j2
            Strict/Undefined.html.j2
            Top.html.j2
    """
    root = tmp_path / "templates"
    (root / "Actions" / "Nested").mkdir(parents=True)
    (root / "Strict").mkdir()

    (root / "Actions" / "Index.html.j2").write_text("<h1>Index {{ title }}</h1>", encoding="utf-8")
    (root / "Actions" / "Nested" / "Deep.html.j2").write_text("deep", encoding="utf-8")
    (root / "Strict" / "Undefined.html.j2").write_text("[{{ missing_variable }}]", encoding="utf-8")
    (root / "Top.html.j2").write_text("top {{ app.get_version() }}", encoding="utf-8")
    return root


@pytest.fixture
def response():
    return ResponseBuffer()


@pytest.fixture
def gzip_response():
    return ResponseBuffer(accept_encoding="gzip, deflate")
