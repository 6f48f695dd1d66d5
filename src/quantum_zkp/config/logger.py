"""Logging setup for quantum_zkp"""

import logging
import os
from typing import Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LoggerSetup:
    """Sets up and manages loggers for the proof engines"""

    def __init__(self, log_dir: Optional[str] = None, level: int = logging.INFO):
        """Initialize logger setup

        Args:
            log_dir: Directory for per-logger files; console only if None
            level: Default level for new loggers
        """
        self.log_dir = log_dir
        self.level = level
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        self.loggers: Dict[str, logging.Logger] = {}

    def get_logger(self, name: str, level: Optional[int] = None) -> logging.Logger:
        """Get or create logger with name"""
        if name in self.loggers:
            return self.loggers[name]

        level = self.level if level is None else level
        logger = logging.getLogger(name)
        logger.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT)

        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        if self.log_dir:
            log_file = os.path.join(self.log_dir, f"{name}.log")
            fh = logging.FileHandler(log_file)
            fh.setLevel(level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

        self.loggers[name] = logger
        return logger

    def get_engine_logger(self, algorithm) -> logging.Logger:
        """Get the logger used by one engine module"""
        tag = getattr(algorithm, 'value', algorithm)
        module = 'hash_chain' if tag == 'hash' else tag
        return self.get_logger(f"quantum_zkp.algorithms.{module}")

    def get_all_loggers(self) -> dict:
        """Get all registered loggers"""
        return self.loggers.copy()

    def close(self):
        """Detach and close every handler this setup added"""
        for logger in self.loggers.values():
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)
        self.loggers.clear()
