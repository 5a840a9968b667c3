# coding: utf8
'''An action queue defers zero-argument callables to a later turn.

Promises never run continuations on the turn that registered or triggered
them; they put them on an action queue instead. Which queue is used is up to
you: pass one to each Promise, or set the process-wide default.

Classes defined here:
 * ActionQueue: abstract base
 * LoopQueue: FIFO queue that you drain yourself (or in a worker thread).
 * AsyncioQueue: defers actions onto an asyncio event loop.

'''

__all__ = [
    'ActionQueue',
    'LoopQueue',
    'AsyncioQueue',
    'get_default_queue',
    'set_default_queue',
]

import asyncio
import logging
import queue
import threading
from .util import subclasses

L = lambda: logging.getLogger(__name__)


class ActionQueue(object):
    '''Runs queued actions one at a time, in the order they were put.

    .put(action) schedules `action()` for a later turn. It must never
    run the action before returning. (Override!)

    .action_error(action, exception) is called each time a queued action
    raises. By default, it logs the error and carries on with the next action.
    '''
    # The shorthand to use for string creation.
    shorthand = ''

    @classmethod
    def fromstring(cls, expression):
        '''Creates an action queue from a given string expression.

        The expression must be "<shorthand>:<specific parameters>",
        with shorthand being the wanted ActionQueue's .shorthand property.
        Currently no queue takes parameters.
        '''
        shorthand, _, expr = expression.partition(':')
        for subclass in subclasses(cls):
            if subclass.shorthand == shorthand:
                return subclass()
        raise ValueError('Could not find an action queue class with shorthand %s'%shorthand)

    def put(self, action):
        '''schedules action() for a later turn.'''
        raise NotImplementedError("Override me")

    def action_error(self, action, exception):
        L().error('queued action %r failed', action, exc_info=exception)

    def _execute(self, action):
        try:
            action()
        except Exception as e:
            self.action_error(action, e)


class LoopQueue(ActionQueue):
    '''FIFO action queue drained by its owner.

    Call .run_pending() to process everything queued so far (and everything
    that gets queued while doing so). Alternatively, .run() processes actions
    until .stop() is called; .start() does that in a new thread.

    .put() is safe to call from any thread. Actions always run one at a time
    on the thread that drains the queue.
    '''
    shorthand = 'loop'

    def __init__(self):
        self._actions = queue.Queue()
        self.running = False
        self._thread = None

    def put(self, action):
        self._actions.put(action)

    def __len__(self):
        return self._actions.qsize()

    def run_pending(self):
        '''Runs queued actions until the queue is empty.

        Returns the number of actions that were run.'''
        count = 0
        while True:
            try:
                action = self._actions.get_nowait()
            except queue.Empty:
                return count
            self._execute(action)
            count += 1

    def run(self):
        '''Runs queued actions, blocking, until .stop() is called.'''
        L().info('LoopQueue.run() called')
        self.running = True
        while self.running:
            try:
                action = self._actions.get(timeout=0.1)
            except queue.Empty:
                continue
            self._execute(action)
        L().info('LoopQueue has finished')

    def start(self):
        '''Run in a new thread.'''
        self._thread = threading.Thread(target=self.run, name=self.__class__.__name__)
        self._thread.start()

    def stop(self):
        '''Stop running queue (possibly from another thread).

        Sets self.running=False, then .join()s the thread if there is one.'''
        self.running = False
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
            self._thread = None


class AsyncioQueue(ActionQueue):
    '''Defers actions onto an asyncio event loop.

    If no loop is given, the loop running at .put() time is used.
    '''
    shorthand = 'asyncio'

    def __init__(self, loop=None):
        self.loop = loop

    def put(self, action):
        loop = self.loop or asyncio.get_running_loop()
        loop.call_soon_threadsafe(self._execute, action)


_default_queue = None

def get_default_queue():
    '''Returns the queue used by promises created without an explicit one.

    A LoopQueue is created on first use.'''
    global _default_queue
    if _default_queue is None:
        _default_queue = LoopQueue()
    return _default_queue

def set_default_queue(action_queue):
    '''Sets the process-wide default queue.

    Accepts an ActionQueue instance, a string expression for
    ActionQueue.fromstring, or None to fall back to a fresh LoopQueue.
    Returns the queue that is now the default.
    '''
    global _default_queue
    if isinstance(action_queue, str):
        action_queue = ActionQueue.fromstring(action_queue)
    _default_queue = action_queue
    L().debug('default action queue set to %r', action_queue)
    return get_default_queue()
