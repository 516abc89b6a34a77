# piece_size.py

import math

P_MIN = 256 * 1024          # 256 KiB
P_CAP = 4 * 1024 * 1024     # 4 MiB
P_MAX = 64 * 1024 * 1024    # 64 MiB
N_THRESHOLD = 7500          # Max pieces before stepping past P_CAP

UNITS = ['B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB', 'EiB']


def select_piece_length(total_bytes):
    if total_bytes <= 0:
        return P_MIN

    log_exp = math.floor(math.log2(total_bytes) - 10)
    current = int(max(P_MIN, 2 ** log_exp))
    if current > P_CAP:
        current = P_CAP

    # Too many pieces: step up to a power of two that keeps the count near N_THRESHOLD
    if total_bytes / current > N_THRESHOLD:
        target = total_bytes / N_THRESHOLD
        stepped = int(2 ** math.floor(math.log2(target)))
        stepped = max(stepped, P_CAP)
        stepped = min(stepped, P_MAX)
        current = stepped

    return max(current, P_MIN)


def format_bytes(size):
    if size <= 0:
        return "0 B"
    i = 0
    while i < len(UNITS) - 1 and size >= 1024 ** (i + 1):
        i += 1
    return f"{size / 1024 ** i:.1f} {UNITS[i]}"
