from mdtoc.config import TocConfig, DEFAULT_PLACEHOLDER, DEFAULT_BEGIN_MARKER
from mdtoc.errors import DocumentError
from mdtoc.files import (find_documents, read_lines, write_lines,
                         process_document, TEMP_SUFFIX)
from mdtoc.util import strip_margin
from tempfile import TemporaryDirectory
import os
import stat
import pytest

DOCUMENT = strip_margin(
    '''|# Guide
       |
       |Welcome.
       |
       |## Setup
       |## Running
       |'''
)

NO_HEADINGS = strip_margin(
    '''|# Notes
       |
       |Nothing to see here.
       |'''
)


def write_file(path: str, contents: str) -> str:
    with open(path, 'w') as f:
        f.write(contents)
    return path


def read_file(path: str) -> str:
    with open(path) as f:
        return f.read()


@pytest.fixture
def docs_dir() -> str:
    with TemporaryDirectory() as dir:
        write_file(os.path.join(dir, 'guide.md'), DOCUMENT)
        write_file(os.path.join(dir, 'notes.md'), NO_HEADINGS)
        write_file(os.path.join(dir, 'readme.txt'), DOCUMENT)
        os.makedirs(os.path.join(dir, 'sub', 'deeper'))
        write_file(os.path.join(dir, 'sub', 'a.md'), DOCUMENT)
        write_file(os.path.join(dir, 'sub', 'deeper', 'b.md'), DOCUMENT)
        os.makedirs(os.path.join(dir, 'folder.md'))
        yield dir


def relative(paths, dir):
    return [os.path.relpath(p, dir) for p in paths]


def test_find_documents_named_files():
    assert find_documents(['b.md', 'a.md'], '*.md') == ['b.md', 'a.md']


def test_find_documents_glob(docs_dir):
    found = find_documents(None, '*.md', docs_dir)
    assert relative(found, docs_dir) == ['guide.md', 'notes.md']

    found = find_documents([], '*.txt', docs_dir)
    assert relative(found, docs_dir) == ['readme.txt']


def test_find_documents_recursive_glob(docs_dir):
    found = relative(find_documents(None, '**/*.md', docs_dir), docs_dir)
    assert os.path.join('sub', 'a.md') in found
    assert os.path.join('sub', 'deeper', 'b.md') in found
    assert 'folder.md' not in found


def test_read_and_write_lines(docs_dir):
    path = os.path.join(docs_dir, 'guide.md')
    lines = read_lines(path, 'UTF-8')
    assert lines[0] == '# Guide\n'
    assert ''.join(lines) == DOCUMENT

    write_lines(path, ['new\n', 'contents'], 'UTF-8')
    assert read_file(path) == 'new\ncontents'
    assert not os.path.exists(path + TEMP_SUFFIX)


def test_write_lines_keeps_mode(docs_dir):
    path = os.path.join(docs_dir, 'guide.md')
    os.chmod(path, 0o640)
    write_lines(path, ['x\n'], 'UTF-8')
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640


def test_read_missing_file(docs_dir):
    path = os.path.join(docs_dir, 'missing.md')
    with pytest.raises(DocumentError) as exc_info:
        read_lines(path, 'UTF-8')

    assert exc_info.value.path == path
    assert path in exc_info.value.message
    assert 'read' in exc_info.value.message


def test_read_bad_encoding(docs_dir):
    path = os.path.join(docs_dir, 'latin.md')
    with open(path, 'wb') as f:
        f.write('## Café\n'.encode('latin-1'))

    with pytest.raises(DocumentError):
        read_lines(path, 'UTF-8')

    assert read_lines(path, 'latin-1') == ['## Café\n']


def test_write_failure_removes_temp_file(docs_dir):
    # Renaming a file over a directory fails.
    path = os.path.join(docs_dir, 'folder.md')
    with pytest.raises(DocumentError) as exc_info:
        write_lines(path, ['x\n'], 'UTF-8')

    assert exc_info.value.path == path
    assert not os.path.exists(path + TEMP_SUFFIX)
    assert os.path.isdir(path)


def test_process_document(docs_dir):
    path = os.path.join(docs_dir, 'guide.md')
    assert process_document(path, TocConfig())

    text = read_file(path)
    assert text.startswith(DEFAULT_PLACEHOLDER + DEFAULT_BEGIN_MARKER)
    assert text.endswith(DOCUMENT)
    assert '- <a href="#user-content-setup">Setup</a>\n' in text

    # Second run: nothing to do.
    mtime = os.stat(path).st_mtime_ns
    assert not process_document(path, TocConfig())
    assert read_file(path) == text
    assert os.stat(path).st_mtime_ns == mtime


def test_process_document_no_headings(docs_dir):
    path = os.path.join(docs_dir, 'notes.md')
    mtime = os.stat(path).st_mtime_ns
    assert not process_document(path, TocConfig())
    assert read_file(path) == NO_HEADINGS
    assert os.stat(path).st_mtime_ns == mtime


def test_process_document_check_only(docs_dir):
    path = os.path.join(docs_dir, 'guide.md')
    assert process_document(path, TocConfig(), check_only=True)
    assert read_file(path) == DOCUMENT
    assert not os.path.exists(path + TEMP_SUFFIX)


def test_process_document_missing(docs_dir):
    with pytest.raises(DocumentError):
        process_document(os.path.join(docs_dir, 'nope.md'), TocConfig())
