"""
Message and text utilities used by mdtoc.
"""

from typing import Optional, NoReturn
from textwrap import TextWrapper
import itertools
import os
import sys

__all__ = ['EnhancedTextWrapper', 'die', 'set_verbosity', 'verbose', 'debug',
           'error', 'warn', 'set_debug', 'strip_margin']

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

class EnhancedTextWrapper(TextWrapper):
    """
    A version of textwrap.TextWrapper that handles embedded newlines more
    appropriately.
    """
    def __init__(self,
                 width: Optional[int] = None,
                 subsequent_indent: str = ''):
        """

        :param width:             wrap width. Defaults to environment variable
                                  COLUMNS (minus 1), or 79.
        :param subsequent_indent: indent prefix for subsequent lines. Defaults
                                  to empty string.
        """
        if not width:
            width = _terminal_width()

        TextWrapper.__init__(self,
                             width=width,
                             subsequent_indent=subsequent_indent)

    def fill(self, msg: str) -> str:
        wrapped = [TextWrapper.fill(self, line) for line in msg.split('\n')]
        return '\n'.join(wrapped)

# -----------------------------------------------------------------------------
# Internal module globals
# -----------------------------------------------------------------------------

_verbose = False
_verbose_prefix = ''
_debug = False
_ERROR_PREFIX = 'ERROR: '
_WARNING_PREFIX = 'WARNING: '
_DEBUG_PREFIX = '(DEBUG) '

# -----------------------------------------------------------------------------
# Private Functions
# -----------------------------------------------------------------------------

def _terminal_width() -> int:
    columns = os.environ.get('COLUMNS', '80')
    try:
        return int(columns) - 1
    except ValueError:
        print(f'*** Ignoring non-numeric value of COLUMNS ({columns})',
              file=sys.stderr)
        return 79


def _fill(prefix: str, msg: str) -> str:
    # Wrappers are built per message, so a COLUMNS change is honored.
    wrapper = EnhancedTextWrapper(subsequent_indent=' ' * len(prefix))
    return wrapper.fill(f'{prefix}{msg}')

# -----------------------------------------------------------------------------
# Public Functions
# -----------------------------------------------------------------------------

def die(msg: str) -> NoReturn:
    """
    Print a message to stderr and abort the program.

    :param msg: the message
    """
    print(msg, file=sys.stderr)
    sys.exit(1)


def set_debug(debug: bool) -> NoReturn:
    """
    Set or clear debug messages.

    :param debug: True or False to enable or disable debug messages
    """
    global _debug

    _debug = debug


def set_verbosity(verbose: bool,
                  verbose_prefix: Optional[str] = None) -> NoReturn:
    """
    Set or clear verbose messages.

    :param verbose:        True or False to enable or disable verbosity
    :param verbose_prefix  string to use as a prefix for verbose messages, or
                           None (or empty string) for no prefix
    """
    global _verbose
    global _verbose_prefix

    _verbose = verbose
    _verbose_prefix = verbose_prefix or ''


def verbose(msg: str) -> NoReturn:
    """
    Conditionally emit a verbose message. See also set_verbosity().

    :param msg: the message
    """
    if _verbose:
        print(_fill(_verbose_prefix, msg))


def debug(msg: str) -> NoReturn:
    """
    Conditionally emit a debug message.

    :param msg: the message
    """
    if _debug:
        print(_fill(_DEBUG_PREFIX, msg))


def warn(msg: str) -> NoReturn:
    """
    Emit a warning message to standard error.

    :param msg: The message
    """
    print(_fill(_WARNING_PREFIX, msg), file=sys.stderr)


def error(msg: str) -> NoReturn:
    """
    Emit an error message to standard error.

    :param msg: The message
    """
    print(_fill(_ERROR_PREFIX, msg), file=sys.stderr)


def strip_margin(s: str, margin_char: str = '|') -> str:
    """
    Akin to Scala's stripMargin() method on string, this function takes a
    multiline string and strips leading white space up to a margin character.
    Handy for writing markdown fixtures inline:

        s = '''|# Title
               |
               |Some text.
            '''

    :param s:           the multiline string
    :param margin_char: the margin character, defaulting to '|'

    :return: the stripped string

    >>> strip_margin('''|## Intro
    ...                 |text''')
    '## Intro\\ntext'
    """
    assert len(margin_char) == 1
    def fix_line(line: str) -> str:
        adj = ''.join(itertools.dropwhile(lambda c: c in [' ', '\t'], line))
        if (len(adj) > 0) and (adj[0] == margin_char):
            return adj[1:]
        else:
            return adj

    return '\n'.join(map(fix_line, s.split('\n')))

# ---------------------------------------------------------------------------
# Fire up doctest if main()
# ---------------------------------------------------------------------------

if __name__ == '__main__':
    from doctest import testmod, ELLIPSIS
    testmod(optionflags=ELLIPSIS)
