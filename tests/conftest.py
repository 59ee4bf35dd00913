"""
Root pytest configuration and fixtures for the openjustice SDK.
"""

from pathlib import Path
import sys

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from openjustice import ClientConfig, OpenJustice  # noqa: E402

API_URL = "https://api.test.openjustice.ai"
PDF_URL = "http://pdf.test.local"


@pytest.fixture
def api_key():
    """Test API key."""
    return "oj-test-key-12345"


@pytest.fixture
def api_url():
    """Test base URL."""
    return API_URL


@pytest.fixture
def config(api_key):
    """Complete configuration; no environment lookups."""
    return ClientConfig(
        api_key=api_key,
        api_url=API_URL,
        dialog_flow_id="flow-1",
        conversation_id="conv-1",
        pdf_server_url=PDF_URL,
        timeout=10,
    )


@pytest.fixture
def client(config):
    """OpenJustice client built from the test configuration."""
    with OpenJustice(config) as c:
        yield c


@pytest.fixture
def updates():
    """Recording progress callback: ``updates.calls`` holds (content, status) tuples."""

    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, content, status):
            self.calls.append((content, status))

    return Recorder()
