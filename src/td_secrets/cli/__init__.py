"""
Command-line tasks for the secrets operator.

Modules are collected into the invoke namespace by td_secrets.tasks.
"""

from td_secrets.config.logging import bootstrap_logging, set_debug


def setup_logging(debug=False):
    """Set up logging based on the --debug flag."""
    bootstrap_logging()
    if debug:
        set_debug(True)
        print("🐛 Debug logging enabled")
