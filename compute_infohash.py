# compute_infohash.py

import hashlib
import sys

import bencodepy


def compute_info_hash(metainfo):
    encoded_info = bencodepy.encode(metainfo[b'info'])
    return hashlib.sha1(encoded_info).digest()


def read_info_hash(torrent_path):
    with open(torrent_path, 'rb') as tf:
        metainfo = bencodepy.decode(tf.read())
    return compute_info_hash(metainfo)


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print("Usage: python compute_infohash.py <torrent_path>")
        sys.exit(1)
    print(f"Info Hash: {read_info_hash(sys.argv[1]).hex()}")
