# create_torrent.py

import bencodepy


def web_seeds(mirrors, base_name, is_dir):
    # Multi-file: a root folder the client appends name/path to.
    # Single file: the full URL of the file itself.
    seeds = []
    for mirror in mirrors:
        if is_dir:
            seeds.append(mirror.rstrip('/') + '/')
        elif mirror.endswith(base_name):
            seeds.append(mirror)
        else:
            seeds.append(mirror.rstrip('/') + '/' + base_name)
    return seeds


def build_torrent(base_name, is_dir, files, piece_length, pieces, tracker_url, mirrors=()):
    """Build the metainfo dictionary, byte string keys and values as bencodepy expects."""
    info = {
        b'name': base_name.encode('utf-8'),
        b'piece length': piece_length,
        b'pieces': pieces,
    }
    if is_dir:
        info[b'files'] = [
            {
                b'length': entry.size,
                b'path': [component.encode('utf-8') for component in entry.rel_path.split('/')]
            } for entry in files
        ]
    else:
        info[b'length'] = files[0].size

    torrent = {
        b'announce': tracker_url.encode('utf-8'),
        b'info': info,
    }
    seeds = web_seeds(mirrors, base_name, is_dir)
    if seeds:
        torrent[b'url-list'] = [seed.encode('utf-8') for seed in seeds]
    return torrent


def write_torrent(torrent_path, torrent):
    with open(torrent_path, 'wb') as tf:
        tf.write(bencodepy.encode(torrent))
