# src/claude_config/core/logging.py
"""
Configuração opcional de logging para aplicações que usam claude_config.

Os módulos da biblioteca apenas obtêm loggers (`logging.getLogger(__name__)`);
nenhum handler é instalado na importação. `configure_logging` é o ponto
único para quem quer ver as mensagens no terminal.
"""

from __future__ import annotations

import logging
from typing import Union


LOGGER_NAME = "claude_config"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_ATTR = "_claude_config_handler"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Instala um StreamHandler no logger `claude_config` e define o nível.

    Chamadas repetidas apenas ajustam o nível (o handler não é duplicado).
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(getattr(h, _HANDLER_ATTR, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "LOGGER_NAME"]
