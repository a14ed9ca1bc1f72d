from mdtoc.config import TocConfig, load_config, build_config
from mdtoc.config import DEFAULT_CONFIG_FILE, DEFAULT_END_MARKER
from mdtoc.errors import TocConfigError
from mdtoc.util import strip_margin
from tempfile import TemporaryDirectory
import os
import pytest


def write_file(path: str, contents: str) -> str:
    with open(path, 'w') as f:
        f.write(contents)
    return path


@pytest.fixture(scope="module")
def config_dir() -> str:
    with TemporaryDirectory() as dir:
        write_file(os.path.join(dir, 'good.yaml'), strip_margin(
            '''|collapse_levels: 0
               |start_with_level: 3
               |toc_header: "## Contents\\n"
               |end_marker: "[//]: # (TOC ends)"
               |pattern: "**/*.md"
               |'''
        ))
        write_file(os.path.join(dir, 'empty.yaml'), '')
        write_file(os.path.join(dir, 'list.yaml'), '- one\n- two\n')
        write_file(os.path.join(dir, 'unknown.yaml'), strip_margin(
            '''|collapse_levels: 1
               |max_level: 4
               |'''
        ))
        write_file(os.path.join(dir, 'bad_int.yaml'),
                   'start_with_level: two\n')
        write_file(os.path.join(dir, 'bool.yaml'), 'collapse_levels: yes\n')
        write_file(os.path.join(dir, 'bad_str.yaml'), 'toc_header: 10\n')
        write_file(os.path.join(dir, 'malformed.yaml'), 'a: [b, c\n')
        yield dir


def test_defaults():
    config = TocConfig()
    assert config.collapse_levels == 1
    assert config.start_with_level == 2
    assert config.toc_header == '\n# **TABLE OF CONTENTS**\n\n'
    assert config.placeholder == (
        '[//]: # (Place this line where you want the table of contents ' +
        'to start)\n'
    )
    assert config.begin_marker == (
        '[Table Of Contents]: <#user-content-table-of-contents> (TOC)\n'
    )
    assert config.end_marker == '[//]: # (End of TOC)\n'
    assert config.encoding == 'UTF-8'
    assert config.pattern == '*.md'


def test_clamping():
    config = TocConfig(collapse_levels=-2, start_with_level=0)
    assert config.collapse_levels == 0
    assert config.start_with_level == 1

    config = TocConfig(collapse_levels=3, start_with_level=4)
    assert config.collapse_levels == 3
    assert config.start_with_level == 4


def test_marker_newlines():
    config = TocConfig(placeholder='<!-- toc -->', end_marker='<!-- /toc -->\n')
    assert config.placeholder == '<!-- toc -->\n'
    assert config.end_marker == '<!-- /toc -->\n'


def test_config_is_frozen():
    config = TocConfig()
    with pytest.raises(Exception):
        config.collapse_levels = 4


def test_load_config(config_dir):
    settings = load_config(os.path.join(config_dir, 'good.yaml'))
    assert settings == {
        'collapse_levels': 0,
        'start_with_level': 3,
        'toc_header': '## Contents\n',
        'end_marker': '[//]: # (TOC ends)',
        'pattern': '**/*.md',
    }
    assert load_config(os.path.join(config_dir, 'empty.yaml')) == {}


@pytest.mark.parametrize('name', ['list.yaml', 'unknown.yaml', 'bad_int.yaml',
                                  'bool.yaml', 'bad_str.yaml',
                                  'malformed.yaml', 'nonexistent.yaml'])
def test_load_config_errors(config_dir, name):
    with pytest.raises(TocConfigError):
        load_config(os.path.join(config_dir, name))


def test_unknown_key_is_named(config_dir):
    with pytest.raises(TocConfigError) as exc_info:
        load_config(os.path.join(config_dir, 'unknown.yaml'))

    assert 'max_level' in exc_info.value.message


def test_build_config_from_file(config_dir):
    config = build_config(os.path.join(config_dir, 'good.yaml'))
    assert config.collapse_levels == 0
    assert config.start_with_level == 3
    assert config.toc_header == '## Contents\n'
    assert config.end_marker == '[//]: # (TOC ends)\n'
    assert config.end_marker != DEFAULT_END_MARKER
    assert config.pattern == '**/*.md'
    assert config.encoding == 'UTF-8'


def test_build_config_overrides(config_dir):
    config = build_config(os.path.join(config_dir, 'good.yaml'),
                          collapse_levels=2,
                          start_with_level=None,
                          encoding='latin-1')
    assert config.collapse_levels == 2
    assert config.start_with_level == 3
    assert config.encoding == 'latin-1'

    with pytest.raises(TypeError):
        build_config(os.path.join(config_dir, 'good.yaml'), max_level=3)


def test_build_config_default_file(monkeypatch):
    with TemporaryDirectory() as dir:
        monkeypatch.chdir(dir)
        assert build_config() == TocConfig()

        write_file(DEFAULT_CONFIG_FILE, 'start_with_level: 1\n')
        config = build_config()
        assert config.start_with_level == 1
        assert config.collapse_levels == 1
