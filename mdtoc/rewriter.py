"""
Second pass over a markdown document: remove any previously generated TOC
and insert a fresh one, either after the placeholder line or, if the
document has no placeholder, at the very top (along with a placeholder, so
the user can move it).
"""

from enum import Enum
from typing import List, Optional, Sequence

from mdtoc.config import TocConfig
from mdtoc.scanner import ScanResult, scan
from mdtoc.util import debug

__all__ = ['RewriteState', 'render_toc', 'rewrite', 'update_toc',
           'TOC_SEPARATOR']

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

# Horizontal rule between the TOC and the end marker.
TOC_SEPARATOR = '\n---\n\n'

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

class RewriteState(Enum):
    AWAITING_INSERTION = 'awaiting-insertion'
    SKIPPING_OLD_TOC = 'skipping-old-toc'
    NORMAL = 'normal'

# -----------------------------------------------------------------------------
# Public functions
# -----------------------------------------------------------------------------

def render_toc(entries: Sequence[str], config: TocConfig) -> str:
    """
    Render the complete TOC block: begin marker, header, entries, separator
    and end marker.

    :param entries: the rendered entries, from scan()
    :param config:  the configuration

    :return: the block, as one string
    """
    return ''.join([config.begin_marker, config.toc_header, *entries,
                    TOC_SEPARATOR, config.end_marker])


def rewrite(lines: Sequence[str],
            scanned: ScanResult,
            config: TocConfig) -> List[str]:
    """
    Produce the new document. The order of the checks for each line matters:

    1. Inside an old TOC, every line is dropped, up to and including the
       end marker.
    2. If the TOC hasn't been inserted, it goes after the placeholder line
       (when the scan found one) or before the current line (when it
       didn't).
    3. A begin marker starts an old TOC, which is dropped.
    4. Anything else passes through.

    An old TOC with no end marker runs to the end of the document.

    :param lines:   the document's lines, each with its line ending
    :param scanned: the result of scanning the same lines
    :param config:  the configuration

    :return: the new document's lines. Joining them yields the new text.
    """
    toc = render_toc(scanned.entries, config).splitlines(keepends=True)
    out = []
    state = RewriteState.AWAITING_INSERTION
    # Where to go when an old TOC ends.
    resume = state

    for lno, line in enumerate(lines, start=1):
        if state == RewriteState.SKIPPING_OLD_TOC:
            if line == config.end_marker:
                debug(f'Old TOC ends at line {lno}.')
                state = resume
            continue

        if state == RewriteState.AWAITING_INSERTION:
            if scanned.found_placeholder:
                if line == config.placeholder:
                    debug(f'Inserting TOC after placeholder at line {lno}.')
                    out.append(line)
                    out.extend(toc)
                    state = RewriteState.NORMAL
                    continue
            else:
                debug('No placeholder. Inserting TOC at top.')
                out.append(config.placeholder)
                out.extend(toc)
                state = RewriteState.NORMAL

        if line == config.begin_marker:
            debug(f'Dropping old TOC starting at line {lno}.')
            resume = state
            state = RewriteState.SKIPPING_OLD_TOC
            continue

        out.append(line)

    return out


def update_toc(lines: Sequence[str], config: TocConfig) -> Optional[List[str]]:
    """
    Scan and rewrite a document.

    :param lines:  the document's lines, each with its line ending
    :param config: the configuration

    :return: the new document's lines, or None if the document has no
             headings that belong in a TOC (in which case it should be left
             alone)
    """
    scanned = scan(lines, config)
    if not scanned.entries:
        return None

    return rewrite(lines, scanned, config)
