from __future__ import annotations

import logging

from observability.logging_conf import setup_logging


def _our_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if getattr(h, "_cep_weather", False)]


def test_setup_is_idempotent_and_quiets_httpx():
    setup_logging("DEBUG")
    setup_logging("WARNING")

    assert len(_our_handlers()) == 1
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")

    assert logging.getLogger().level == logging.INFO
