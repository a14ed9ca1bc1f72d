"""
Tool and library to generate (or regenerate) a table of contents in
markdown documents, in place. Intended for GitHub wikis and READMEs: the TOC
is a list of links to the "user-content-" anchors GitHub generates for
headings.

By default, the TOC goes at the very top of a document, preceded by a
placeholder line:

    [//]: # (Place this line where you want the table of contents to start)

Move that line wherever you want the TOC to appear and run the tool again;
the TOC will move there. The placeholder and the lines delimiting the TOC
are hidden when the markdown is rendered.

To see the command line usage, run "mdtoc -h".

To use the library interface, see the mdtoc() function, or update_toc() for
documents that are already in memory.
"""

import os
import sys
import docopt
import traceback
from typing import Any, Dict, List, Optional, Sequence

from termcolor import colored

from mdtoc.config import TocConfig, build_config, DEFAULT_CONFIG_FILE
from mdtoc.errors import MdTocError, UsageError, TocConfigError, DocumentError
from mdtoc.files import find_documents, process_document
from mdtoc.rewriter import update_toc
from mdtoc.util import (error, warn, die, set_verbosity, set_debug, verbose)

__all__ = ['TocConfig', 'MdTocError', 'UsageError', 'TocConfigError',
           'DocumentError', 'build_config', 'update_toc', 'mdtoc', 'main']

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

VERSION = "1.1.0"

PROG = os.path.basename(sys.argv[0])

USAGE = ('''
{0}, version {2}

Usage:
  {0} [-D | --debug] [-v | --verbose] [-s | --stack] [--check]
  {1} [-c CONFIG | --config CONFIG] [-e ENC | --encoding ENC]
  {1} [-C N | --collapse N] [-l N | --start-level N]
  {1} [-p PAT | --pattern PAT] [FILE ...]
  {0} (-h | --help)
  {0} (-V | --version)

Options:
  --check                     Don't change anything. List the documents whose
                              TOC is missing or out of date, and exit with
                              status 1 if there are any.
  -c CONFIG, --config CONFIG  YAML configuration file. If not specified,
                              "{3}" is used, if it exists.
  -C N, --collapse N          Number of heading levels to collapse out of the
                              TOC indentation. With 1, H2 entries are not
                              indented. Overrides the configuration.
  -D, --debug                 Emit debug messages
  -e ENC, --encoding ENC      Encoding of the documents. Overrides the
                              configuration.
  -h, --help                  This message
  -l N, --start-level N       Lowest heading level to include in the TOC.
                              2 leaves H1 headings out. Overrides the
                              configuration.
  -p PAT, --pattern PAT       Glob pattern used to find documents when no FILE
                              is given. "**" matches any number of
                              directories. Overrides the configuration.
  -s, --stack                 Show stack traces on error.
  -v, --verbose               Emit verbose messages
  -V, --version               Show version and exit

FILE is a markdown document to process. If none is given, all documents in
the current directory that match the pattern ("*.md", unless configured
otherwise) are processed.

Each document is rewritten to a temporary file with a "{4}" extension, which
then replaces the original. Documents without any headings for the TOC are
left alone.
'''.format(PROG, ' ' * len(PROG), VERSION, DEFAULT_CONFIG_FILE, '.mdw'))

# -----------------------------------------------------------------------------
# Internal functions
# -----------------------------------------------------------------------------

def _int_option(args: Dict[str, Any], option: str) -> Optional[int]:
    value = args[option]
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise UsageError(f'{option} requires an integer, not "{value}".')


def _parse_args(argv: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """
    Parse the command line parameters.

    :param argv: the arguments, or None for sys.argv[1:]

    :return: the parsed arguments
    """
    args = docopt.docopt(USAGE, argv=argv, version=VERSION)
    set_verbosity(args['--verbose'], verbose_prefix=f'{PROG}: ')
    set_debug(args['--debug'])
    return args


def _report_stale(paths: Sequence[str]) -> None:
    for path in paths:
        if sys.stdout.isatty():
            path = colored(path, 'yellow', attrs=['bold'])
        print(f'{path}: TOC is out of date')

# -----------------------------------------------------------------------------
# Public Functions
# -----------------------------------------------------------------------------

def mdtoc(files: Sequence[str],
          config: TocConfig,
          check_only: bool = False) -> List[str]:
    """
    Generate or regenerate the table of contents in a series of markdown
    documents. The documents are processed in order. An I/O error stops the
    run; documents that were already rewritten stay rewritten.

    :param files:      the paths of the documents
    :param config:     the configuration
    :param check_only: if True, don't write anything; just determine which
                       documents would change

    :return: the paths of the documents that changed (or would have)

    :raise DocumentError: if a document can't be read or replaced
    """
    changed = []
    for path in files:
        verbose(f'Processing "{path}"...')
        if process_document(path, config, check_only=check_only):
            changed.append(path)

    return changed

# -----------------------------------------------------------------------------
# Main program
# -----------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None):
    show_stack = False
    try:
        args = _parse_args(argv)
        show_stack = args['--stack']
        config = build_config(
            args['--config'],
            collapse_levels=_int_option(args, '--collapse'),
            start_with_level=_int_option(args, '--start-level'),
            encoding=args['--encoding'],
            pattern=args['--pattern'],
        )
        documents = find_documents(args['FILE'], config.pattern)
        if len(documents) == 0:
            warn(f'No documents match "{config.pattern}".')

        check_only = args['--check']
        changed = mdtoc(documents, config, check_only=check_only)
        if check_only:
            _report_stale(changed)
            if changed:
                sys.exit(1)

    except UsageError as e:
        error(e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        die('\n*** Interrupted.')
    except Exception as e:
        if show_stack:
            tb = traceback.format_exc()
            print(tb, file=sys.stderr)
        else:
            error(str(e))
        sys.exit(1)

if __name__ == '__main__':
    main()
