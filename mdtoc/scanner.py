"""
First pass over a markdown document: find the heading lines and render a TOC
entry for each heading that belongs in the table of contents.

Only the "# heading", "## heading", etc., style of markdown heading is
recognized, and the first "#" must be in column 0. Code fences are not
special, so a "#" comment at the start of a line in a fenced block counts
as a heading.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from mdtoc.config import TocConfig
from mdtoc.util import debug

__all__ = ['ScanResult', 'heading_level', 'slugify', 'render_entry', 'scan',
           'MAX_HEADING_LEVEL', 'ANCHOR_PREFIX']

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

MAX_HEADING_LEVEL = 6

# GitHub prefixes the ids it generates for headings with "user-content-".
ANCHOR_PREFIX = 'user-content-'

# Characters dropped from heading text when building an anchor slug.
SLUG_DISCARD = frozenset(',[];:/?"\'*+.')

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    What the scan of one document found.

    entries:           the rendered TOC entries, in document order
    found_placeholder: whether the TOC placeholder line is in the document
    """
    entries: Tuple[str, ...]
    found_placeholder: bool

# -----------------------------------------------------------------------------
# Public functions
# -----------------------------------------------------------------------------

def heading_level(line: str) -> int:
    """
    Determine the heading level of a line, by counting the leading "#"
    characters. Runs longer than six still count as level 6.

    :param line: the line

    :return: the level (1-6), or 0 if the line is not a heading

    >>> heading_level('## Section')
    2
    >>> heading_level('######## Way down')
    6
    >>> heading_level(' # Indented')
    0
    """
    level = 0
    while level < MAX_HEADING_LEVEL and line[level:level + 1] == '#':
        level += 1
    return level


def slugify(text: str) -> str:
    """
    Turn heading text into the anchor slug used in the TOC link: lower case,
    a fixed set of punctuation removed, and each space replaced by a hyphen.

    :param text: the heading text, without the leading "#" characters

    :return: the slug

    >>> slugify('Hello, World!')
    'hello-world!'
    >>> slugify('Q&A: Tips/Tricks?')
    'q&a-tipstricks'
    >>> slugify('Two  spaces')
    'two--spaces'
    """
    kept = ''.join(c for c in text.lower() if c not in SLUG_DISCARD)
    return kept.replace(' ', '-')


def render_entry(line: str, level: int, config: TocConfig) -> str:
    """
    Render the TOC entry for a heading line: an indented markdown list item
    containing an HTML link to the heading's anchor.

    :param line:   the heading line
    :param level:  the heading level, as returned by heading_level()
    :param config: the configuration, for collapse_levels

    :return: the TOC entry, with a trailing newline

    >>> render_entry('### Getting Started\\n', 3, TocConfig(collapse_levels=1))
    '  - <a href="#user-content-getting-started">Getting Started</a>\\n'
    """
    text = line[level:].strip()
    slug = slugify(text)
    indent = max(level - config.collapse_levels, 0)
    # A negative repeat count yields an empty string, which is what we want
    # for an indent of 0.
    spaces = ' ' * ((indent - 1) * 2)
    return f'{spaces}- <a href="#{ANCHOR_PREFIX}{slug}">{text}</a>\n'


def scan(lines: Sequence[str], config: TocConfig) -> ScanResult:
    """
    Scan the lines of a document for headings and for the TOC placeholder.

    Lines inside a previously generated TOC (from the begin marker through
    the end marker) are ignored. The rewriter drops them, so a heading or
    placeholder there won't survive the rewrite. That also keeps the TOC
    header out of the next TOC.

    :param lines:  the document's lines, each with its line ending
    :param config: the configuration

    :return: a ScanResult
    """
    entries = []
    found_placeholder = False
    in_old_toc = False

    for line in lines:
        if in_old_toc:
            if line == config.end_marker:
                in_old_toc = False
            continue

        if line == config.begin_marker:
            in_old_toc = True
            continue

        if (not found_placeholder) and (line == config.placeholder):
            found_placeholder = True
            continue

        level = heading_level(line)
        if level == 0:
            continue

        if level < config.start_with_level:
            debug(f'Skipping level {level} heading: {line.rstrip()}')
            continue

        entries.append(render_entry(line, level, config))

    return ScanResult(entries=tuple(entries),
                      found_placeholder=found_placeholder)

# ---------------------------------------------------------------------------
# Fire up doctest if main()
# ---------------------------------------------------------------------------

if __name__ == '__main__':
    from doctest import testmod, ELLIPSIS
    testmod(optionflags=ELLIPSIS)
