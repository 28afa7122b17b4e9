class BlamShotException(Exception):
    '''Base class to extend in order to throw exception in blamshot.

    It takes as optional argument the chain of the fields that
    caused the exception, the innermost first.
    '''

    def __init__(self, message=None, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__(message)


class FormatError(BlamShotException):
    '''The data is not a recognized container.'''
    pass


class TruncatedDataError(BlamShotException):
    '''The stream ended before the declared amount of data.'''
    pass


class ClosedError(BlamShotException):
    pass


class FieldTooLongError(BlamShotException):
    '''The value doesn't fit the space reserved for it in the format.'''
    pass
