"""Shared test fixtures."""

import pytest

from request_scope import AppRequestContext, RequestContext


@pytest.fixture
def app_ctx():
    return AppRequestContext(request={"path": "/widgets/1"}, response={})


@pytest.fixture
def other_ctx():
    return AppRequestContext(request={"path": "/widgets/2"}, response={})


@pytest.fixture
def active_ctx(app_ctx):
    """An AppRequestContext that is ambient for the whole test, id ``r-1``."""
    app_ctx.request_id = "r-1"
    with RequestContext.store.scope(app_ctx):
        yield app_ctx
