import logging
import shutil
from pathlib import Path
import tempfile
import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_home_config():
    """Temporarily move any existing user-level language config out of the way.

    Some tests expect no user-level config to exist. This fixture moves the
    file aside for the duration of the test session and restores it afterwards.
    """
    config_path = Path.home() / ".version-control-config.json"
    backup_dir = None
    moved = False
    if config_path.exists():
        backup_dir = Path(tempfile.mkdtemp(prefix="version_control_backup_"))
        shutil.move(str(config_path), str(backup_dir / config_path.name))
        moved = True

    try:
        yield
    finally:
        # restore
        if moved and backup_dir is not None:
            shutil.move(str(backup_dir / config_path.name), str(config_path))
            shutil.rmtree(str(backup_dir), ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop the stream handler the CLI installs so later tests do not write to a closed stream."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
