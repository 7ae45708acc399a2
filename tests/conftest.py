"""Pytest configuration and fixtures for alertfmt tests."""

import pytest


@pytest.fixture(autouse=True)
def reset_template_funcs():
    """Reset the global base registry before and after each test.

    This ensures tests don't leak the base registry between each other.
    Tests that need it must explicitly initialize it.
    """
    from alertfmt.notifier.template_func import reset_template_funcs as _reset

    _reset()
    yield
    _reset()


@pytest.fixture
def template_funcs():
    """Initialize the base registry with a typical external URL.

    Usage:
        def test_something(template_funcs):
            template_funcs["externalURL"]()  # 'https://host/prefix/'
    """
    from alertfmt.notifier.template_func import init_template_funcs

    return init_template_funcs("https://host/prefix/")
