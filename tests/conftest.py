import pytest
from unittest.mock import Mock
from thenable.action_queue import LoopQueue, set_default_queue


class HandlerMock(Mock):
    '''Mock whose children return None.

    A plain Mock returns another Mock, which has a callable .then and would
    be unwrapped as a thenable when used as a handler.'''
    def _get_child_mock(self, **kw):
        kw.setdefault('return_value', None)
        return Mock(**kw)


@pytest.fixture
def aq():
    q = LoopQueue()
    set_default_queue(q)
    yield q
    set_default_queue(None)

@pytest.fixture
def mock():
    return HandlerMock()
