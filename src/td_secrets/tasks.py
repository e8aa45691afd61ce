"""
Secrets operator task collection.

Usage from a project's tasks.py:
    from td_secrets.tasks import namespace
"""

from invoke import Collection

from .cli import secrets

namespace = Collection()

# Secrets tasks live in a nested namespace: invoke secrets.push, invoke secrets.show-endpoint
secrets_collection = Collection.from_module(secrets)
namespace.add_collection(secrets_collection, name='secrets')
