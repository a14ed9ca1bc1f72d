"""
Document I/O: finding the markdown files to process, reading them, and
replacing them safely with their rewritten versions.
"""

import os
import shutil
from typing import List, Optional, Sequence

from grizzled.file import eglob

from mdtoc.config import TocConfig
from mdtoc.errors import DocumentError
from mdtoc.rewriter import update_toc
from mdtoc.util import verbose, debug

__all__ = ['find_documents', 'read_lines', 'write_lines', 'process_document',
           'TEMP_SUFFIX']

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

# The rewritten document is written next to the original, with this suffix,
# then renamed over it.
TEMP_SUFFIX = '.mdw'

# -----------------------------------------------------------------------------
# Public functions
# -----------------------------------------------------------------------------

def find_documents(files: Optional[Sequence[str]],
                   pattern: str,
                   directory: str = '.') -> List[str]:
    """
    Determine which documents to process.

    :param files:     paths named by the user. If non-empty, they're returned
                      as is, in order.
    :param pattern:   glob pattern used when no files are named. Supports the
                      "**" recursive wildcard.
    :param directory: the directory the pattern is relative to

    :return: the paths
    """
    if files:
        return list(files)

    # Note that eglob returns a generator.
    matches = [os.path.normpath(p) for p in eglob(pattern, directory)]
    documents = sorted(p for p in matches if os.path.isfile(p))
    debug(f'"{pattern}" matched {len(documents)} document(s) in "{directory}"')
    return documents


def read_lines(path: str, encoding: str) -> List[str]:
    """
    Read a document.

    :param path:     the path to the document
    :param encoding: the document's encoding

    :return: the lines, each with its line ending (except, possibly, the last)

    :raise DocumentError: if the document can't be read
    """
    try:
        with open(path, mode='r', encoding=encoding) as f:
            return f.readlines()
    except (OSError, UnicodeError) as e:
        raise DocumentError(path, 'read', e)


def write_lines(path: str, lines: Sequence[str], encoding: str) -> None:
    """
    Replace a document. The lines are written to a temporary file beside
    the document, which is then renamed over it. The document's permissions
    are copied to the new file. On failure, the temporary file is removed
    and the original document is untouched.

    :param path:     the path to the document
    :param lines:    the new contents
    :param encoding: the document's encoding

    :raise DocumentError: if the document can't be written or replaced
    """
    temp = path + TEMP_SUFFIX
    action = 'write'
    try:
        with open(temp, mode='w', encoding=encoding, newline='\n') as out:
            out.writelines(lines)
        if os.path.exists(path):
            shutil.copymode(path, temp)
        action = 'replace'
        os.replace(temp, path)
    except (OSError, UnicodeError) as e:
        if os.path.exists(temp):
            os.unlink(temp)
        raise DocumentError(path, action, e)


def process_document(path: str,
                     config: TocConfig,
                     check_only: bool = False) -> bool:
    """
    Generate or regenerate the TOC in one document.

    :param path:       the path to the document
    :param config:     the configuration
    :param check_only: if True, determine whether the document would change,
                       but don't write it

    :return: True if the document changed (or would have changed), False if
             it was already up to date or has no headings for a TOC

    :raise DocumentError: on any I/O error
    """
    lines = read_lines(path, config.encoding)
    new_lines = update_toc(lines, config)
    if new_lines is None:
        verbose(f'No headings in "{path}". Leaving it alone.')
        return False

    if new_lines == lines:
        verbose(f'TOC in "{path}" is up to date.')
        return False

    if check_only:
        verbose(f'TOC in "{path}" is out of date.')
    else:
        write_lines(path, new_lines, config.encoding)
        verbose(f'Updated TOC in "{path}".')

    return True
