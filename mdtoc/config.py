"""
Configuration for a TOC run: the TocConfig value shared (read-only) by every
document, and the code to build one from a YAML file plus command line
overrides.

A configuration file looks like this (every key is optional):

    collapse_levels: 1
    start_with_level: 2
    toc_header: "\\n# **TABLE OF CONTENTS**\\n\\n"
    encoding: UTF-8
    pattern: "**/*.md"
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml

from mdtoc.errors import TocConfigError
from mdtoc.util import verbose, debug

__all__ = ['TocConfig', 'load_config', 'build_config', 'DEFAULT_CONFIG_FILE',
           'DEFAULT_PLACEHOLDER', 'DEFAULT_BEGIN_MARKER', 'DEFAULT_END_MARKER',
           'DEFAULT_TOC_HEADER']

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

DEFAULT_CONFIG_FILE = '.mdtoc.yaml'

# The marker lines are markdown link reference definitions and comments, so
# they're hidden when the document is rendered. Don't change them unless you
# really understand the markdown syntax.
DEFAULT_PLACEHOLDER = (
    '[//]: # (Place this line where you want the table of contents to start)\n'
)
DEFAULT_BEGIN_MARKER = (
    '[Table Of Contents]: <#user-content-table-of-contents> (TOC)\n'
)
DEFAULT_END_MARKER = '[//]: # (End of TOC)\n'

DEFAULT_TOC_HEADER = '\n# **TABLE OF CONTENTS**\n\n'

# Keys permitted in the configuration file, and their types.
_CONFIG_FIELDS = {
    'collapse_levels':  int,
    'start_with_level': int,
    'toc_header':       str,
    'placeholder':      str,
    'begin_marker':     str,
    'end_marker':       str,
    'encoding':         str,
    'pattern':          str,
}

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TocConfig:
    """
    Configuration data, supplied once per run.

    collapse_levels:  how many heading levels to remove from the indentation
                      of each TOC entry. With 1, H2 entries are not indented.
                      Does not affect which headings are included.
    start_with_level: the lowest-numbered heading level included in the TOC.
                      2 leaves out H1 headings.
    toc_header:       markdown placed at the top of the TOC, visible to readers
    placeholder:      line marking where the TOC goes
    begin_marker:     first line of a generated TOC
    end_marker:       last line of a generated TOC
    encoding:         encoding of the markdown documents
    pattern:          glob used to find documents when none are named
    """
    collapse_levels: int = 1
    start_with_level: int = 2
    toc_header: str = DEFAULT_TOC_HEADER
    placeholder: str = DEFAULT_PLACEHOLDER
    begin_marker: str = DEFAULT_BEGIN_MARKER
    end_marker: str = DEFAULT_END_MARKER
    encoding: str = 'UTF-8'
    pattern: str = '*.md'

    def __post_init__(self):
        # Frozen, so the normalized values have to be forced in.
        normalized = {
            'collapse_levels':  max(self.collapse_levels, 0),
            'start_with_level': max(self.start_with_level, 1),
        }
        for name in ('placeholder', 'begin_marker', 'end_marker'):
            value = getattr(self, name)
            if not value.endswith('\n'):
                normalized[name] = value + '\n'

        for name, value in normalized.items():
            object.__setattr__(self, name, value)

# -----------------------------------------------------------------------------
# Internal functions
# -----------------------------------------------------------------------------

def _check_type(key: str, value: Any, config_path: str) -> Any:
    expected = _CONFIG_FIELDS[key]
    # bool is an int subclass, but "collapse_levels: yes" is still a mistake.
    if isinstance(value, bool) or not isinstance(value, expected):
        raise TocConfigError(
            f'"{config_path}": Bad value for "{key}": expected ' +
            f'{expected.__name__}, got {value!r}'
        )
    return value

# -----------------------------------------------------------------------------
# Public functions
# -----------------------------------------------------------------------------

def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file. Throws TocConfigError on error.

    :param config_path: path to the configuration file

    :return: a dictionary of the settings found in the file, suitable for
             passing to TocConfig
    """
    verbose(f'Loading {config_path}...')
    try:
        with open(config_path, 'r') as y:
            contents = yaml.safe_load(y)
    except OSError as e:
        raise TocConfigError(
            f'Can\'t read "{config_path}": {e.strerror or e}'
        )
    except yaml.YAMLError as e:
        raise TocConfigError(f'"{config_path}" is not valid YAML: {e}')

    if contents is None:
        return {}

    if not isinstance(contents, dict):
        raise TocConfigError(
            f'"{config_path}" must contain a mapping of settings.'
        )

    bad_keys = set(contents.keys()) - set(_CONFIG_FIELDS.keys())
    if bad_keys:
        keys = ', '.join(sorted(str(k) for k in bad_keys))
        raise TocConfigError(f'"{config_path}": Unknown settings: {keys}')

    return {k: _check_type(k, v, config_path) for k, v in contents.items()}


def build_config(config_path: Optional[str] = None,
                 **overrides: Any) -> TocConfig:
    """
    Build the run's configuration. Values come from, in increasing order of
    precedence: the defaults, the configuration file, and the overrides.

    :param config_path: path to a YAML configuration file. If None, the
                        file DEFAULT_CONFIG_FILE in the current directory is
                        used, if it exists.
    :param overrides:   TocConfig field values, typically from the command
                        line. None values are ignored.

    :return: the configuration
    """
    if config_path is None and os.path.exists(DEFAULT_CONFIG_FILE):
        config_path = DEFAULT_CONFIG_FILE

    settings = load_config(config_path) if config_path else {}

    valid = {f.name for f in fields(TocConfig)}
    for key, value in overrides.items():
        if key not in valid:
            raise TypeError(f'Unknown configuration field "{key}"')
        if value is not None:
            settings[key] = value

    config = TocConfig(**settings)
    debug(f'Configuration: {config}')
    return config
