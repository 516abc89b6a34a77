# piece.py

import hashlib


class PieceAccumulator:
    """
    Hashes a byte stream in fixed-size pieces.

    Bytes are consumed in whatever chunks the caller has; a piece is emitted
    every time exactly piece_length bytes have been fed since the last one.
    With resets_per_file the window is discarded on start_file(), otherwise
    pieces run on across file boundaries until flush().
    """

    def __init__(self, piece_length, hash_name='sha1', resets_per_file=False):
        if piece_length <= 0:
            raise ValueError(f"piece_length must be positive, got {piece_length}")
        self.piece_length = piece_length
        self.hash_name = hash_name
        self.resets_per_file = resets_per_file
        self.pieces = []  # Digests of every emitted piece, in order
        self.reset()

    def reset(self):
        self.filled = 0
        self.hasher = hashlib.new(self.hash_name)

    def is_empty(self):
        return self.filled == 0

    def start_file(self):
        if self.resets_per_file:
            self.reset()
            self.pieces = []

    def consume(self, data):
        """Feed data into the current window; return the digests it completed."""
        view = memoryview(data)
        emitted = []
        offset = 0
        while offset < len(view):
            take = min(self.piece_length - self.filled, len(view) - offset)
            self.hasher.update(view[offset:offset + take])
            self.filled += take
            offset += take
            if self.filled == self.piece_length:
                emitted.append(self._emit())
        return emitted

    def flush(self):
        # A short final piece only exists if something was fed since the last emit
        if self.is_empty():
            return None
        return self._emit()

    def _emit(self):
        digest = self.hasher.digest()
        self.pieces.append(digest)
        self.reset()
        return digest
