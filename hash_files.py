# hash_files.py

import os
import time

from exceptions import ReadError
from multi_hasher import MultiHasher

CHUNK_SIZE = 32 * 1024 * 1024  # 32 MiB read buffer, reused across files
MIB = 1024 * 1024


class HashRun:
    def __init__(self, piece_length, results, torrent_pieces, total_bytes, elapsed):
        self.piece_length = piece_length
        self.results = results  # FileHashResult per file, in enumeration order
        self.torrent_pieces = torrent_pieces  # Concatenated 20-byte SHA-1 digests
        self.total_bytes = total_bytes
        self.elapsed = elapsed

    @property
    def piece_count(self):
        return len(self.torrent_pieces) // 20

    def average_rate(self):
        if self.elapsed <= 0:
            return 0.0
        return self.total_bytes / self.elapsed / MIB


def resolve_path(base_path, is_dir, rel_path):
    if not is_dir:
        return base_path
    return os.path.join(base_path, *rel_path.split('/'))


def hash_files(base_path, is_dir, files, piece_length, chunk_size=CHUNK_SIZE, verbose=False):
    """
    Read every file once, in order, through a single reusable buffer.

    Any open or read failure raises ReadError and abandons the run.
    """
    hasher = MultiHasher(piece_length)
    expected_total = sum(entry.size for entry in files)
    buf = bytearray(chunk_size)
    view = memoryview(buf)
    processed = 0
    piece_index = 0
    start_time = time.monotonic()

    for entry in files:
        full_path = resolve_path(base_path, is_dir, entry.rel_path)
        hasher.begin_file(entry.rel_path)
        try:
            with open(full_path, 'rb') as f:
                while True:
                    n = f.readinto(buf)
                    if not n:
                        break
                    for digest in hasher.ingest(view[:n]):
                        if verbose:
                            print(f"Hashing piece {piece_index}: {digest.hex()}")
                        piece_index += 1
                    processed += n
        except OSError as e:
            raise ReadError(f"reading {full_path}: {e.strerror or e}") from e
        result = hasher.end_file()
        if result.size != entry.size:
            raise ReadError(f"{full_path} changed while hashing: listed {entry.size} bytes, read {result.size}")

        elapsed = time.monotonic() - start_time
        rate = processed / elapsed / MIB if elapsed > 0 else 0.0
        progress = processed / expected_total * 100 if expected_total > 0 else 100.0
        print(f"  {progress:.1f}% {rate:.1f} MiB/s   {entry.rel_path}")

    torrent_pieces = hasher.finalize()
    if verbose and hasher.piece_count > piece_index:
        print(f"Hashing piece {piece_index}: {torrent_pieces[-20:].hex()}")

    run = HashRun(piece_length, hasher.results, torrent_pieces, processed, time.monotonic() - start_time)
    print(f"\nCompleted in {run.elapsed:.2f}s (avg {run.average_rate():.2f} MiB/s)")
    return run
