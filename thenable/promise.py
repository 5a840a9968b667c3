'''Defines the :class:`Promise` class.

A Promise (also known as a Deferred or a Future) is like an order slip
for something that is still being produced.

The implementation follows the Promises/A+ contract: `then` returns a new
promise, handlers always run on a later turn of an action queue, and
handler results that look like promises (have a callable `then`) are
unwrapped before they settle the derived promise.
'''

__all__ = ['Promise', 'PromiseState', 'Deferred', 'deferred', 'defer']

from collections import namedtuple
from enum import Enum
import logging
from .action_queue import get_default_queue
from .resolution import resolve_promise

L = lambda: logging.getLogger(__name__)


class PromiseState(Enum):
    pending = 0
    fulfilled = 1
    rejected = 2


def _identity(value):
    return value


class Promise(object):
    '''Encapsulates a result that will arrive later.

    `executor(resolve, reject)` is called right away, on the calling thread.
    It receives the two settlement functions of this promise: the first call
    to either of them settles it for good, later calls do nothing. If the
    executor raises, the promise is rejected with the exception.

    Handlers registered with .then() run on `queue`, which defaults to
    :func:`get_default_queue`. Promises derived via .then() share the queue
    of their parent.

    >>> p = Promise(lambda resolve, reject: resolve(41))
    >>> derived = p.then(lambda x: x + 1)
    >>> # later, e.g. in your main loop:
    >>> get_default_queue().run_pending()
    '''

    def __init__(self, executor, queue=None):
        self._queue = queue if queue is not None else get_default_queue()
        self._state = PromiseState.pending
        self._value = None
        self._reason = None
        self._on_fulfilled = []
        self._on_rejected = []

        def resolve(value):
            if self._state is not PromiseState.pending:
                return
            self._state = PromiseState.fulfilled
            self._value = value
            self._flush(self._on_fulfilled)

        def reject(reason):
            if self._state is not PromiseState.pending:
                return
            self._state = PromiseState.rejected
            self._reason = reason
            self._flush(self._on_rejected)

        try:
            executor(resolve, reject)
        except Exception as e:
            L().debug('executor of %r raised %r', self, e)
            reject(e)

    def _flush(self, continuations):
        L().debug('%r settled, scheduling %d continuation(s)', self, len(continuations))
        self._on_fulfilled = None
        self._on_rejected = None
        # a continuation that cannot be queued rejects its own derived promise
        for continuation, reject_derived in continuations:
            try:
                self._queue.put(continuation)
            except Exception as e:
                L().warning('could not queue continuation of %r: %r', self, e)
                reject_derived(e)

    @property
    def state(self):
        return self._state

    @property
    def value(self):
        '''the fulfillment value (None unless fulfilled).'''
        return self._value

    @property
    def reason(self):
        '''the rejection reason (None unless rejected).'''
        return self._reason

    @property
    def queue(self):
        return self._queue

    def is_pending(self):
        return self._state is PromiseState.pending

    def is_fulfilled(self):
        return self._state is PromiseState.fulfilled

    def is_rejected(self):
        return self._state is PromiseState.rejected

    def then(self, on_fulfilled=None, on_rejected=None):
        '''Registers handlers and returns the derived promise.

        `on_fulfilled(value)` runs if this promise is fulfilled,
        `on_rejected(reason)` if it is rejected; never both, never on the
        current turn. Whatever the handler returns settles the derived
        promise (thenables are unwrapped first); if it raises, the derived
        promise is rejected with the exception.

        Arguments that are not callable count as missing. A missing
        `on_fulfilled` passes the value on, a missing `on_rejected` passes
        the reason on.
        '''
        if not callable(on_fulfilled):
            on_fulfilled = _identity
        if not callable(on_rejected):
            on_rejected = None
        derived = None

        def executor(resolve, reject):
            def call_handler(handler, payload):
                try:
                    x = handler(payload)
                except Exception as e:
                    L().debug('handler %r raised %r', handler, e)
                    reject(e)
                    return
                resolve_promise(derived, x, resolve, reject)

            def fulfilled():
                call_handler(on_fulfilled, self._value)

            def rejected():
                if on_rejected is None:
                    reject(self._reason)
                else:
                    call_handler(on_rejected, self._reason)

            if self._state is PromiseState.fulfilled:
                self._queue.put(fulfilled)
            elif self._state is PromiseState.rejected:
                self._queue.put(rejected)
            else:
                self._on_fulfilled.append((fulfilled, reject))
                self._on_rejected.append((rejected, reject))

        derived = Promise(executor, queue=self._queue)
        return derived

    def catch(self, on_rejected):
        '''shorthand for .then(None, on_rejected).'''
        return self.then(None, on_rejected)

    @classmethod
    def resolved(cls, value, queue=None):
        '''Returns a promise settled from value.

        A thenable value is adopted, i.e. the promise follows its outcome.'''
        promise = None

        def executor(resolve, reject):
            resolve_promise(promise, value, resolve, reject)

        promise = cls(executor, queue=queue)
        return promise

    @classmethod
    def rejected(cls, reason, queue=None):
        '''Returns a promise rejected with reason.'''
        def executor(resolve, reject):
            reject(reason)
        return cls(executor, queue=queue)

    def __repr__(self):
        if self._state is PromiseState.fulfilled:
            return '<%s fulfilled: %r>' % (self.__class__.__name__, self._value)
        if self._state is PromiseState.rejected:
            return '<%s rejected: %r>' % (self.__class__.__name__, self._reason)
        return '<%s pending>' % (self.__class__.__name__,)


Deferred = namedtuple('Deferred', 'promise resolve reject')

def deferred(queue=None):
    '''Returns a Deferred: a pending promise plus its own resolve and reject.

    Lets outside code (e.g. a test harness, or a callback based producer)
    settle the promise.
    '''
    capabilities = []
    promise = Promise(lambda resolve, reject: capabilities.extend((resolve, reject)), queue=queue)
    resolve, reject = capabilities
    return Deferred(promise, resolve, reject)

defer = deferred
