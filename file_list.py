# file_list.py

import os
import stat
from collections import namedtuple

from exceptions import EnumerationError

FileEntry = namedtuple('FileEntry', ['rel_path', 'size'])


def _raise_walk_error(error):
    raise EnumerationError(f"walk {error.filename}: {error.strerror}") from error


def _check_name(name, filepath):
    # Undecodable bytes come back from os.walk as surrogate escapes
    try:
        name.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EnumerationError(f"file name is not valid UTF-8: {os.fsencode(filepath)!r}") from e
    return name


def collect_files(path):
    """
    Enumerate the input as (is_dir, [FileEntry]).

    A single file is listed under its base name. A directory is walked
    recursively keeping regular files only, paths are relative to it with
    '/' separators, and entries are ordered depth-first by name with files
    and subdirectories compared alike ('a/x' before 'a.txt' before 'b').
    """
    try:
        st = os.stat(path)
    except OSError as e:
        raise EnumerationError(f"stat {path}: {e.strerror}") from e

    base_name = _check_name(os.path.basename(os.path.abspath(path)), path)
    if not stat.S_ISDIR(st.st_mode):
        return False, [FileEntry(base_name, st.st_size)]

    files = []
    for root, dirs, filenames in os.walk(path, onerror=_raise_walk_error):
        dirs.sort()
        for filename in filenames:
            filepath = os.path.join(root, filename)
            try:
                file_st = os.lstat(filepath)
            except OSError as e:
                raise EnumerationError(f"stat {filepath}: {e.strerror}") from e
            if not stat.S_ISREG(file_st.st_mode):
                continue  # Symlinks, sockets, fifos
            relative_path = _check_name(os.path.relpath(filepath, path), filepath)
            files.append(FileEntry('/'.join(relative_path.split(os.sep)), file_st.st_size))

    if not files:
        raise EnumerationError(f"no files found under {path}")
    files.sort(key=lambda entry: entry.rel_path.split('/'))
    return True, files


def total_size(files):
    return sum(entry.size for entry in files)
