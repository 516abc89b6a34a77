# pgp_sign.py

import subprocess

from exceptions import SigningError

GPG = 'gpg'


def pgp_detached_sign(file_path, key_id, gpg=GPG):
    """Return an ASCII-armored detached signature of file_path made with key_id."""
    args = [gpg, '--local-user', key_id, '--armor', '--detach-sign', '--output', '-', file_path]
    try:
        proc = subprocess.run(args, stdout=subprocess.PIPE, check=True)
    except FileNotFoundError as e:
        raise SigningError(f"{gpg} not found: {e}") from e
    except subprocess.CalledProcessError as e:
        raise SigningError(f"{gpg} failed with exit status {e.returncode}") from e
    return proc.stdout.decode('utf-8').strip()
