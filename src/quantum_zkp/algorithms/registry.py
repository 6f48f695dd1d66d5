"""Engine registry.

Maps each Algorithm member to the engine class that implements it.
"""

from typing import Dict, List, Optional, Type

from quantum_zkp.config.manager import ZKPConfig
from quantum_zkp.errors import InvalidParameters
from quantum_zkp.types import Algorithm

# Engine registry
_ENGINE_REGISTRY: Dict[Algorithm, Type] = {}


def register_engine(algorithm: Algorithm):
    """Decorator to register an engine class.

    Args:
        algorithm: Algorithm the engine implements

    Returns:
        Decorator function
    """
    def decorator(cls):
        _ENGINE_REGISTRY[Algorithm.parse(algorithm)] = cls
        return cls
    return decorator


def get_engine(algorithm, config: Optional[ZKPConfig] = None):
    """Instantiate the engine for an algorithm.

    Args:
        algorithm: Algorithm member or tag
        config: Configuration handed to the engine

    Returns:
        Engine instance

    Raises:
        InvalidParameters: If no engine is registered for the algorithm
    """
    algorithm = Algorithm.parse(algorithm)
    if algorithm not in _ENGINE_REGISTRY:
        raise InvalidParameters(
            f"No engine registered for '{algorithm.value}'. "
            f"Available: {[a.value for a in _ENGINE_REGISTRY]}"
        )
    return _ENGINE_REGISTRY[algorithm](config=config)


def list_engines() -> List[Algorithm]:
    """List all registered algorithms."""
    return list(_ENGINE_REGISTRY.keys())
