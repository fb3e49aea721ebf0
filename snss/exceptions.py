class SNSSException(Exception):
    '''Base class to extend in order to throw exception in snss.

    Other than a human readable message it carries the absolute offset into
    the original buffer where the problem was detected and the chain of the
    layers (i.e. the names of the fields) that caused the exception; the chain
    is filled while the exception propagates out of the chunks.
    '''

    def __init__(self, message, offset, chain=None):
        self.message = message
        self.offset = offset
        self.chain = chain if chain is not None else []
        super().__init__(message, offset)

    def __str__(self):
        location = '.'.join(self.chain)
        if location:
            return f'error at offset {self.offset}: {location}: {self.message}'

        return f'error at offset {self.offset}: {self.message}'


class BadMagic(SNSSException):
    pass


class Truncated(SNSSException):
    pass


class InvalidText(SNSSException):
    pass
