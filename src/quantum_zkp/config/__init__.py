"""Configuration and logging setup"""

from .manager import (
    AlgorithmProfile,
    ConfigManager,
    SecurityLevel,
    ZKPConfig,
    load_config,
)
from .logger import LoggerSetup

__all__ = [
    'AlgorithmProfile',
    'ConfigManager',
    'SecurityLevel',
    'ZKPConfig',
    'load_config',
    'LoggerSetup',
]
