"""Tagged loggers: every message is prefixed with ``[tag]``."""
from __future__ import annotations

import logging
from typing import Any, MutableMapping, Tuple


class TaggedLogger(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['tag']}] {msg}", kwargs


def get_logger(tag: str, name: str = "transport_ui_tests") -> TaggedLogger:
    return TaggedLogger(logging.getLogger(f"{name}.{tag}"), {"tag": tag})
