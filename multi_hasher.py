# multi_hasher.py

import hashlib

from exceptions import HashingStateError
from piece import PieceAccumulator

FILE_HASH = 'sha256'     # Whole-file and per-file piece digests (metalink)
TORRENT_HASH = 'sha1'    # Cross-file piece digests (torrent)


class FileHashResult:
    def __init__(self, rel_path, size, sha256, piece_hashes):
        self.rel_path = rel_path
        self.size = size
        self.sha256 = sha256  # Hex encoded
        self.piece_hashes = piece_hashes  # Hex encoded, per-file boundaries

    def __eq__(self, other):
        if not isinstance(other, FileHashResult):
            return NotImplemented
        return (self.rel_path, self.size, self.sha256, self.piece_hashes) == \
            (other.rel_path, other.size, other.sha256, other.piece_hashes)

    def __repr__(self):
        return (f"FileHashResult(rel_path={self.rel_path!r}, size={self.size}, "
                f"sha256={self.sha256!r}, pieces={len(self.piece_hashes)})")


class MultiHasher:
    """
    Single-pass hashing for both output documents.

    Every chunk updates the whole-file SHA-256, the per-file SHA-256 piece
    window (reset at each file) and the torrent SHA-1 piece window (which
    runs across files). Call begin_file / ingest... / end_file per file in
    enumeration order, then finalize() once.
    """

    def __init__(self, piece_length):
        self.piece_length = piece_length
        self.file_pieces = PieceAccumulator(piece_length, FILE_HASH, resets_per_file=True)
        self.torrent_pieces_acc = PieceAccumulator(piece_length, TORRENT_HASH, resets_per_file=False)
        self.results = []
        self.current_rel_path = None
        self.file_hasher = None
        self.file_byte_count = 0
        self.finalized = False

    def begin_file(self, rel_path):
        self._check_open(False)
        self.current_rel_path = rel_path
        self.file_hasher = hashlib.new(FILE_HASH)
        self.file_byte_count = 0
        self.file_pieces.start_file()
        self.torrent_pieces_acc.start_file()

    def ingest(self, chunk):
        """Hash one chunk of the current file; returns any completed torrent piece digests."""
        self._check_open(True)
        if not chunk:
            return []
        self.file_hasher.update(chunk)
        self.file_byte_count += len(chunk)
        self.file_pieces.consume(chunk)
        return self.torrent_pieces_acc.consume(chunk)

    def end_file(self):
        self._check_open(True)
        self.file_pieces.flush()
        result = FileHashResult(
            rel_path=self.current_rel_path,
            size=self.file_byte_count,
            sha256=self.file_hasher.hexdigest(),
            piece_hashes=[digest.hex() for digest in self.file_pieces.pieces],
        )
        self.results.append(result)
        self.current_rel_path = None
        self.file_hasher = None
        return result

    def finalize(self):
        """Flush the last short torrent piece and return the concatenated SHA-1 digests."""
        self._check_open(False)
        self.torrent_pieces_acc.flush()
        self.finalized = True
        return self.torrent_pieces

    @property
    def torrent_pieces(self):
        return b''.join(self.torrent_pieces_acc.pieces)

    @property
    def piece_count(self):
        return len(self.torrent_pieces_acc.pieces)

    def _check_open(self, expect_open):
        if self.finalized:
            raise HashingStateError("hasher already finalized")
        is_open = self.file_hasher is not None
        if expect_open and not is_open:
            raise HashingStateError("no file started; call begin_file first")
        if not expect_open and is_open:
            raise HashingStateError(f"file {self.current_rel_path!r} was not ended")
