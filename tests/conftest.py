import logging

import pytest
import structlog

from anoto.codec import Codec, anoto_6x6_a4_fixed
from anoto.config import select_preset


@pytest.fixture(autouse=True)
def _quiet_logging():
    # Keep per-patch events out of test output; the CLI reconfigures per call
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def codec() -> Codec:
    return anoto_6x6_a4_fixed()


@pytest.fixture(scope="session")
def compact_codec() -> Codec:
    return Codec(select_preset("5x5_compact"))
