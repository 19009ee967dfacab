"""Test fixtures for Meltdown Manager.

This package provides reusable test fixtures:
- core: Scenario, state, event and engine factories
- api: TestClient and engine fixtures for route tests
"""
