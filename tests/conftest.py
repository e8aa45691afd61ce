"""
Root pytest configuration for td-secrets.
"""

from td_secrets.config.logging import bootstrap_logging

# Bootstrap logging for all tests
bootstrap_logging()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "cli: tests that drive the invoke tasks"
    )
