import logging

import pytest
import structlog


# A small program whose output is noun * 100 + verb for noun, verb in [0, 13]:
#    0: ADD [noun] [verb] -> [3]     (harmless scratch write)
#    4: MUL [1] [13] -> [0]          (mem[0] = noun * 100)
#    8: ADD [0] [2] -> [0]           (mem[0] += verb)
#   12: HALT
#   13: 100
ENCODER_PROGRAM = [1, 0, 0, 3, 2, 1, 13, 0, 1, 0, 2, 0, 99, 100]


@pytest.fixture
def encoder_program():
    return list(ENCODER_PROGRAM)


def quiet_structlog():
    """Only warnings and above from library loggers while testing."""
    structlog.reset_defaults()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING)
    )


quiet_structlog()


@pytest.fixture
def reset_logging():
    """Undo the logging configuration the CLI installs."""
    yield
    quiet_structlog()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
