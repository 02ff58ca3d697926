import pytest

from postfix_exporter.metrics import QUEUE_NAMES


def make_files(directory, count, prefix="msg"):
    directory.mkdir(parents=True, exist_ok=True)
    for i in range(count):
        (directory / f"{prefix}{i}").write_text("queued\n")


@pytest.fixture
def queue_root(tmp_path):
    """Empty Postfix queue root with all six queue directories."""
    root = tmp_path / "spool"
    for name in QUEUE_NAMES:
        (root / name).mkdir(parents=True)
    return root
