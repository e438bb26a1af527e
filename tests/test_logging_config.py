from __future__ import annotations

import logging

from anasa.logging_config import setup_logging


class TestSetupLogging:
    def test_repeated_calls_keep_one_handler(self) -> None:
        setup_logging("DEBUG")
        setup_logging("WARNING")
        logger = logging.getLogger("anasa")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert logger.handlers[0].level == logging.WARNING

    def test_unknown_level_falls_back_to_warning(self) -> None:
        setup_logging("chatty")
        assert logging.getLogger("anasa").level == logging.WARNING
