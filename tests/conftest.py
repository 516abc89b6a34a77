import pytest


def _make_data(size, seed=0):
    # Deterministic and non-periodic at piece scale, so neighbouring pieces differ
    pattern = bytes((i * 31 + seed) % 256 for i in range(4093))
    repeats = size // len(pattern) + 1
    return (pattern * repeats)[:size]


@pytest.fixture
def make_data():
    return _make_data


@pytest.fixture
def write_tree(tmp_path):
    """Create files under tmp_path/<root> from a {rel_path: bytes} mapping."""
    def _write(files, root='bundle'):
        base = tmp_path / root
        base.mkdir()
        for rel_path, data in files.items():
            target = base.joinpath(*rel_path.split('/'))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        return base
    return _write
