import asyncio
import pytest
import time
from unittest.mock import Mock, call
from thenable.action_queue import ActionQueue, LoopQueue, AsyncioQueue, get_default_queue, set_default_queue
from thenable.promise import Promise


def test_aq_fifo(aq, mock):
    aq.put(mock.a)
    aq.put(mock.b)
    assert len(aq) == 2
    assert mock.mock_calls == []
    assert aq.run_pending() == 2
    assert mock.mock_calls == [call.a(), call.b()]
    assert len(aq) == 0

def test_aq_runs_actions_queued_meanwhile(aq, mock):
    aq.put(lambda: aq.put(mock.later))
    assert aq.run_pending() == 2
    assert mock.mock_calls == [call.later()]

def test_aq_action_error(aq, mock):
    aq.action_error = Mock()
    e = Exception()
    failing = Mock(side_effect=e)
    aq.put(failing)
    aq.put(mock.after)
    aq.run_pending()
    assert aq.action_error.mock_calls == [call(failing, e)]
    assert mock.mock_calls == [call.after()]

def test_aq_action_error_is_logged(aq, caplog):
    aq.put(Mock(side_effect=Exception('kaputt')))
    aq.run_pending()
    assert 'failed' in caplog.text

def test_aq_threaded(mock):
    q = LoopQueue()
    q.start()
    try:
        q.put(mock.foo)
        time.sleep(0.3)
        assert mock.mock_calls == [call.foo()]
        assert q.running
    finally:
        q.stop()
    assert not q.running

def test_fromstring():
    assert isinstance(ActionQueue.fromstring('loop:'), LoopQueue)
    assert isinstance(ActionQueue.fromstring('asyncio:'), AsyncioQueue)
    with pytest.raises(ValueError):
        ActionQueue.fromstring('nonexistent:')

def test_default_queue():
    set_default_queue(None)
    q = get_default_queue()
    assert isinstance(q, LoopQueue)
    assert get_default_queue() is q
    q2 = set_default_queue('loop:')
    assert q2 is not q
    assert Promise.resolved(1).queue is q2
    set_default_queue(None)

def test_asyncio_queue():
    async def main():
        q = AsyncioQueue()
        p2 = Promise.resolved(1, queue=q).then(lambda x: x + 1)
        assert p2.is_pending()
        for i in range(5):
            await asyncio.sleep(0)
        return p2
    p2 = asyncio.run(main())
    assert p2.value == 2

def test_base_put_not_implemented():
    with pytest.raises(NotImplementedError):
        ActionQueue().put(lambda: None)
