import os

import pytest

from exceptions import EnumerationError
from file_list import FileEntry, collect_files, total_size


def test_single_file(tmp_path):
    path = tmp_path / 'image.iso'
    path.write_bytes(b'x' * 10)
    is_dir, files = collect_files(str(path))
    assert is_dir is False
    assert files == [FileEntry('image.iso', 10)]


def test_directory_is_sorted_and_slash_separated(write_tree):
    base = write_tree({
        'zeta.txt': b'1',
        'alpha.txt': b'22',
        'sub/b.bin': b'333',
        'sub/a.bin': b'',
        'sub/deeper/c': b'4444',
    })
    is_dir, files = collect_files(str(base))
    assert is_dir is True
    assert files == [
        FileEntry('alpha.txt', 2),
        FileEntry('sub/a.bin', 0),
        FileEntry('sub/b.bin', 3),
        FileEntry('sub/deeper/c', 4),
        FileEntry('zeta.txt', 1),
    ]
    assert total_size(files) == 10


def test_order_is_stable(write_tree):
    base = write_tree({'b': b'1', 'a/x': b'2', 'c/y': b'3'})
    assert collect_files(str(base)) == collect_files(str(base))


def test_trailing_separator_on_directory(write_tree):
    base = write_tree({'f': b'1'})
    is_dir, files = collect_files(str(base) + os.sep)
    assert is_dir is True
    assert files == [FileEntry('f', 1)]


def test_symlinks_are_skipped(write_tree):
    base = write_tree({'real.txt': b'data'})
    os.symlink(base / 'real.txt', base / 'link.txt')
    _, files = collect_files(str(base))
    assert [f.rel_path for f in files] == ['real.txt']


def test_missing_path(tmp_path):
    with pytest.raises(EnumerationError, match='stat'):
        collect_files(str(tmp_path / 'nope'))


def test_empty_directory(tmp_path):
    (tmp_path / 'empty' / 'nested').mkdir(parents=True)
    with pytest.raises(EnumerationError, match='no files found'):
        collect_files(str(tmp_path / 'empty'))


def test_files_and_directories_share_one_name_order(write_tree):
    base = write_tree({'b.bin': b'1', 'a.txt': b'2', 'a/x.bin': b'3'})
    _, files = collect_files(str(base))
    # 'a' sorts before 'a.txt', so the directory's contents come first
    assert [f.rel_path for f in files] == ['a/x.bin', 'a.txt', 'b.bin']


def test_non_utf8_file_name_is_rejected(write_tree):
    base = write_tree({'ok.txt': b'1'})
    with open(os.path.join(os.fsencode(str(base)), b'caf\xe9.txt'), 'wb') as f:
        f.write(b'data')
    with pytest.raises(EnumerationError, match='not valid UTF-8'):
        collect_files(str(base))


def test_non_utf8_input_name_is_rejected(tmp_path):
    path = os.path.join(os.fsencode(str(tmp_path)), b'caf\xe9.iso')
    with open(path, 'wb') as f:
        f.write(b'data')
    with pytest.raises(EnumerationError, match='not valid UTF-8'):
        collect_files(os.fsdecode(path))
