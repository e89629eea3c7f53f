# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from pydiverse.bimap import BiMap
from pydiverse.common.util.structlog import setup_logging

# Setup


@pytest.fixture
def one_two():
    return BiMap({"one": 1, "two": 2})


@pytest.fixture
def debug_logs():
    # capture_logs only swaps the processors, the level filter lives in the wrapper
    old_wrapper_class = structlog.get_config()["wrapper_class"]
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG)
    )
    try:
        with capture_logs() as logs:
            yield logs
    finally:
        structlog.configure(wrapper_class=old_wrapper_class)


setup_logging(log_level=logging.INFO)
# `debug_logs` swaps the configuration, so loggers must not freeze the first one
structlog.configure(cache_logger_on_first_use=False)
