def subclasses(cls):
    '''Recursively yields all subclasses of cls.'''
    for subclass in cls.__subclasses__():
        yield subclass
        yield from subclasses(subclass)
