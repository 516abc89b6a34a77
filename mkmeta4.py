# mkmeta4.py

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

from compute_infohash import compute_info_hash
from create_torrent import build_torrent, write_torrent
from exceptions import OutputError, PackagingError
from file_list import collect_files, total_size
from hash_files import CHUNK_SIZE, hash_files
from metalink_file import MetalinkFile
from pgp_sign import pgp_detached_sign
from piece_size import format_bytes, select_piece_length

DEFAULT_TRACKER = 'https://privtracker.com/metalink/announce'


@dataclass(frozen=True)
class PackageConfig:
    path: str
    mirrors: Tuple[str, ...] = ()
    tracker: str = DEFAULT_TRACKER
    out_dir: Optional[str] = None  # None: next to the input
    sign_key: Optional[str] = None  # gpg --local-user; None disables signing
    chunk_size: int = CHUNK_SIZE
    verbose: bool = False

    @property
    def base_name(self):
        return os.path.basename(os.path.abspath(self.path))

    def output_dir(self):
        if self.out_dir:
            return self.out_dir
        return os.path.dirname(os.path.abspath(self.path)) or '.'


class PackageOutput:
    def __init__(self, meta_path, torrent_path, info_hash):
        self.meta_path = meta_path
        self.torrent_path = torrent_path
        self.info_hash = info_hash


def package(config):
    """Hash the input once and write <name>.torrent and <name>.meta4 for it."""
    is_dir, files = collect_files(config.path)
    total = total_size(files)
    piece_length = select_piece_length(total)
    print(f"Total size: {format_bytes(total)}, piece size: {format_bytes(piece_length)}, {len(files)} files")

    run = hash_files(config.path, is_dir, files, piece_length,
                     chunk_size=config.chunk_size, verbose=config.verbose)

    base_name = config.base_name
    metalink = MetalinkFile(base_name, is_dir, piece_length, config.mirrors)
    for result in run.results:
        metalink.add_result(result)
    torrent = build_torrent(base_name, is_dir, files, piece_length, run.torrent_pieces,
                            config.tracker, config.mirrors)

    out_dir = config.output_dir()
    try:
        os.makedirs(out_dir, exist_ok=True)
    except OSError as e:
        raise OutputError(f"creating outdir {out_dir}: {e.strerror}") from e

    torrent_path = os.path.join(out_dir, metalink.torrent_name)
    meta_path = os.path.join(out_dir, base_name + '.meta4')
    written = []
    try:
        written.append(torrent_path)
        write_torrent(torrent_path, torrent)
        written.append(meta_path)
        metalink.write(meta_path)
        if config.sign_key:
            metalink.signature = pgp_detached_sign(meta_path, config.sign_key)
            metalink.write(meta_path)
    except PackagingError:
        _remove_outputs(written)
        raise
    except OSError as e:
        _remove_outputs(written)
        raise OutputError(f"writing {e.filename or out_dir}: {e.strerror or e}") from e

    output = PackageOutput(meta_path, torrent_path, compute_info_hash(torrent))
    print(f"\nGenerated:\n{meta_path}\n{torrent_path}")
    print(f"Info Hash: {output.info_hash.hex()}")
    return output


def _remove_outputs(paths):
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def build_parser():
    parser = argparse.ArgumentParser(
        prog='mkmeta4',
        description='Create a Metalink (.meta4) and a matching .torrent for a file or directory.')
    parser.add_argument('path', help='File or directory to package')
    parser.add_argument('-m', '--mirrors', action='append', default=[], metavar='URL',
                        help='HTTPS mirror (if directory: base URL); repeatable')
    parser.add_argument('--tracker', default=DEFAULT_TRACKER,
                        help="Tracker URL for the generated torrent's announce (default: %(default)s)")
    parser.add_argument('-o', '--out-dir', default=None,
                        help="Output directory (default: the input's parent directory)")
    parser.add_argument('--sign', '--pgp', '--gpg', dest='sign', default=None, metavar='KEY_ID',
                        help='Sign the metalink with this gpg --local-user')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print every piece hash')
    return parser


def config_from_args(args):
    return PackageConfig(
        path=args.path,
        mirrors=tuple(args.mirrors),
        tracker=args.tracker,
        out_dir=args.out_dir,
        sign_key=args.sign,
        verbose=args.verbose,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        package(config_from_args(args))
    except PackagingError as e:
        print(f"mkmeta4: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
