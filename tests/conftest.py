import os
import sys
import pytest
from fastapi.testclient import TestClient

# Add the project root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from imgix_signer.main import app
from imgix_signer.core.config import ImgixSource, settings


@pytest.fixture
def client():
    """Create a test client for the app."""
    return TestClient(app)


@pytest.fixture
def source():
    """imgix source used throughout the examples."""
    return ImgixSource(token="aaBBcc", domain="https://my-social-network.imgix.net")


@pytest.fixture
def configured(monkeypatch, source):
    """Point the process-wide settings at the example source."""
    monkeypatch.setattr(settings, "imgix_secure_token", source.token)
    monkeypatch.setattr(settings, "imgix_domain", source.domain)
    return source


@pytest.fixture
def unconfigured(monkeypatch):
    """Clear the process-wide imgix settings."""
    monkeypatch.setattr(settings, "imgix_secure_token", "")
    monkeypatch.setattr(settings, "imgix_domain", "")
