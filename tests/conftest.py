import logging
import os
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the user's config file and DELVE_* variables out of every test."""
    import delve.config

    for name in list(os.environ):
        if name.startswith("DELVE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(delve.config, "default_config_path", lambda: tmp_path / "no-such-config.yaml")


@pytest.fixture(autouse=True)
def restore_package_logger():
    """The CLI installs a handler on the ``delve`` logger; undo that after each test."""
    pkg = logging.getLogger("delve")
    handlers, level = list(pkg.handlers), pkg.level
    yield
    pkg.handlers[:] = handlers
    pkg.setLevel(level)
