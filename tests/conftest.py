import os
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_working_directory():
    """Run the test session from an empty temporary directory.

    The CLI and the configuration loader look for ``.clog.toml`` relative
    to the current directory. Running from a scratch directory keeps a
    configuration file in the checkout from leaking into the tests.
    """
    original = Path.cwd()
    scratch = Path(tempfile.mkdtemp(prefix="pyclog_tests_"))
    os.chdir(scratch)
    try:
        yield scratch
    finally:
        os.chdir(original)
        shutil.rmtree(str(scratch), ignore_errors=True)
