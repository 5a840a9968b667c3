'''Exceptions raised (or used as rejection reasons) by thenable.'''

__all__ = ['PromiseError', 'ChainingCycleError']


class PromiseError(Exception):
    '''promise-related error'''

class ChainingCycleError(PromiseError, TypeError):
    '''a handler returned the very promise its result should settle.'''
