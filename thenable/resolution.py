'''The resolution procedure.

Decides how the value returned by a handler settles a derived promise:
plain values fulfill it directly, thenables (anything with a callable
`then` attribute, foreign promise implementations included) are unwrapped
first, and the derived promise itself is refused as a chaining cycle.
'''

__all__ = ['ResolutionKind', 'probe', 'is_thenable', 'resolve_promise']

from enum import Enum
import inspect
import logging
from .errors import ChainingCycleError

L = lambda: logging.getLogger(__name__)

_missing = object()


class ResolutionKind(Enum):
    plain = 0
    thenable = 1
    cycle = 2


def probe(promise, x):
    '''Classifies x with respect to promise.

    Returns (kind, then); `then` is the callable to unwrap x with, or None.
    The `then` attribute is read exactly once. Errors raised while reading it
    propagate, except the AttributeError of an object that has no `then`.
    '''
    if x is None:
        return ResolutionKind.plain, None
    if x is promise:
        return ResolutionKind.cycle, None
    try:
        then = x.then
    except AttributeError:
        if inspect.getattr_static(x, 'then', _missing) is _missing:
            return ResolutionKind.plain, None
        raise
    if callable(then):
        return ResolutionKind.thenable, then
    return ResolutionKind.plain, None


def is_thenable(x):
    '''True if x has a callable `then` attribute. Never raises.'''
    try:
        kind, _ = probe(None, x)
    except Exception:
        return False
    return kind is ResolutionKind.thenable


def resolve_promise(promise, x, resolve, reject):
    '''Settles `promise` from x, using the promise's own `resolve`/`reject`.

    Nested thenables are unwrapped recursively, without a depth limit.
    Of all the continuations handed to a thenable, only the first call
    has any effect.
    '''
    try:
        kind, then = probe(promise, x)
    except Exception as e:
        L().debug('reading .then of %r failed: %r', x, e)
        reject(e)
        return

    if kind is ResolutionKind.cycle:
        reject(ChainingCycleError('chaining cycle detected for %r' % (promise,)))
        return
    if kind is ResolutionKind.plain:
        resolve(x)
        return

    called = False

    def on_inner_fulfill(y):
        nonlocal called
        if called:
            return
        called = True
        resolve_promise(promise, y, resolve, reject)

    def on_inner_reject(e):
        nonlocal called
        if called:
            return
        called = True
        reject(e)

    try:
        then(on_inner_fulfill, on_inner_reject)
    except Exception as e:
        if called:
            L().debug('ignoring %r raised by .then of %r after it settled', e, x)
            return
        called = True
        reject(e)
