import logging

import pytest


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level changed by configure_logging."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)
