"""Pytest configuration and shared fixtures."""

# Load environment variables from .env file at test startup
# This ensures API keys and other config are available before fixtures are created
from dotenv import load_dotenv
load_dotenv()

# Import all fixtures from fixture modules
pytest_plugins = [
    "tests.fixtures.core.scenarios",
    "tests.fixtures.core.states",
    "tests.fixtures.core.engines",
    "tests.fixtures.api",
]
