"""
Exceptions raised by mdtoc.
"""

__all__ = ['MdTocError', 'UsageError', 'TocConfigError', 'DocumentError']


class MdTocError(Exception):
    def __init__(self, msg: str = ''):
        Exception.__init__(self, msg)
        self.message = msg


class UsageError(MdTocError):
    pass


class TocConfigError(MdTocError):
    pass


class DocumentError(MdTocError):
    """
    A document could not be read, written or replaced. The message names
    the file and the underlying cause.
    """
    def __init__(self, path: str, action: str, cause: Exception):
        reason = getattr(cause, 'strerror', None) or str(cause)
        MdTocError.__init__(self, f'Can\'t {action} "{path}": {reason}')
        self.path = path
        self.cause = cause
