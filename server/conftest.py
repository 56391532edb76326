"""
Pytest bootstrap for running the Django test suite without pytest-django.

Tests use Django's `TestCase` / `SimpleTestCase` classes, so this module:
- points `DJANGO_SETTINGS_MODULE` at `config.settings` and calls `django.setup()`
- creates and tears down the test databases once per session
- empties every cache before each test, since challenges and sessions live there
"""

import os

import django
from django.test.utils import (
    setup_databases,
    setup_test_environment,
    teardown_databases,
    teardown_test_environment,
)


_db_cfg = None


def pytest_configure():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
    django.setup()


def pytest_sessionstart(session):
    global _db_cfg
    setup_test_environment()
    _db_cfg = setup_databases(verbosity=0, interactive=False, keepdb=False)


def pytest_runtest_setup(item):
    from django.core.cache import caches

    for cache in caches.all():
        cache.clear()


def pytest_sessionfinish(session, exitstatus):
    global _db_cfg
    if _db_cfg:
        teardown_databases(_db_cfg, verbosity=0)
        _db_cfg = None
    teardown_test_environment()
