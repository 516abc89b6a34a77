import hashlib

import bencodepy

from compute_infohash import compute_info_hash, read_info_hash
from create_torrent import build_torrent, web_seeds, write_torrent
from file_list import FileEntry

TRACKER = 'https://tracker.example/announce'
PIECES = b'\x01' * 20 + b'\x02' * 20


# ---------------------------------------------------------
# Web seeds
# ---------------------------------------------------------
def test_web_seeds_directory_are_base_urls():
    mirrors = ['https://a.example/pub', 'https://b.example/pub/']
    assert web_seeds(mirrors, 'bundle', True) == ['https://a.example/pub/', 'https://b.example/pub/']


def test_web_seeds_single_file():
    mirrors = ['https://a.example/pub/', 'https://b.example/dl/image.iso']
    assert web_seeds(mirrors, 'image.iso', False) == [
        'https://a.example/pub/image.iso',
        'https://b.example/dl/image.iso',
    ]


# ---------------------------------------------------------
# Metainfo layout
# ---------------------------------------------------------
def test_single_file_torrent():
    torrent = build_torrent('image.iso', False, [FileEntry('image.iso', 300 * 1024)],
                            256 * 1024, PIECES, TRACKER)
    assert torrent[b'announce'] == TRACKER.encode()
    assert b'url-list' not in torrent
    info = torrent[b'info']
    assert info == {
        b'name': b'image.iso',
        b'piece length': 256 * 1024,
        b'pieces': PIECES,
        b'length': 300 * 1024,
    }


def test_multi_file_torrent_keeps_order():
    files = [FileEntry('b.bin', 200), FileEntry('a/c.bin', 100)]
    torrent = build_torrent('bundle', True, files, 256 * 1024, PIECES, TRACKER,
                            mirrors=['https://m.example/x'])
    info = torrent[b'info']
    assert b'length' not in info
    assert info[b'files'] == [
        {b'length': 200, b'path': [b'b.bin']},
        {b'length': 100, b'path': [b'a', b'c.bin']},
    ]
    assert torrent[b'url-list'] == [b'https://m.example/x/']


def test_write_and_decode(tmp_path):
    torrent = build_torrent('bundle', True, [FileEntry('f', 5)], 256 * 1024, PIECES, TRACKER)
    path = tmp_path / 'bundle.torrent'
    write_torrent(str(path), torrent)

    decoded = bencodepy.decode(path.read_bytes())
    assert decoded[b'info'][b'pieces'] == PIECES
    assert decoded[b'info'][b'piece length'] == 256 * 1024
    assert decoded[b'announce'] == TRACKER.encode()


def test_info_hash(tmp_path):
    torrent = build_torrent('image.iso', False, [FileEntry('image.iso', 1)], 256 * 1024, PIECES, TRACKER)
    expected = hashlib.sha1(bencodepy.encode(torrent[b'info'])).digest()
    assert compute_info_hash(torrent) == expected

    path = tmp_path / 'image.iso.torrent'
    write_torrent(str(path), torrent)
    assert read_info_hash(str(path)) == expected
