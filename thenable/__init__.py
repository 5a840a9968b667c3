'''Promises/A+ style promises for Python.

* Promise: the eventual outcome of an operation, with chainable .then().
* deferred(): a promise together with its resolve / reject functions.
* ActionQueue: where promise handlers are deferred to (LoopQueue, AsyncioQueue).
'''

from .errors import PromiseError, ChainingCycleError
from .promise import Promise, PromiseState, Deferred, deferred, defer
from .resolution import is_thenable
from .action_queue import ActionQueue, LoopQueue, AsyncioQueue, get_default_queue, set_default_queue

__all__ = [
        'Promise',
        'PromiseState',
        'Deferred',
        'deferred',
        'defer',
        'is_thenable',
        'PromiseError',
        'ChainingCycleError',
        'ActionQueue',
        'LoopQueue',
        'AsyncioQueue',
        'get_default_queue',
        'set_default_queue',
        ]
