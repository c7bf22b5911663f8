import json
import logging

import pytest


@pytest.fixture(autouse=True)
def reset_wctypegen_logger():
    yield
    logger = logging.getLogger("wctypegen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def project(tmp_path):
    """A minimal Deno project with an empty src/ directory."""
    (tmp_path / "src").mkdir()
    (tmp_path / "deno.json").write_text(json.dumps({"tasks": {}}, indent=2))
    return tmp_path
