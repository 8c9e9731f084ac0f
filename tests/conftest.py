"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use a real API key or the production origin
os.environ.setdefault("NASA_API_KEY", "test-fake-key")
os.environ.setdefault("NASA_API_URL", "https://apod.test/planetary/apod")
os.environ.setdefault("ENVIRONMENT", "test")
