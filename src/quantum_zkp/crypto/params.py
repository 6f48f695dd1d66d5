"""Parameter validation for every algorithm.

validate_parameters never raises; engines turn a False into InvalidParameters.
"""

from typing import Any, Mapping

MIN_LATTICE_DIMENSION = 128
MIN_CHAIN_LENGTH = 100
MIN_VARIABLES = 8
MIN_HYBRID_ALGORITHMS = 2

BASE_ALGORITHMS = ('lattice', 'hash', 'multivariate')

# accepted spellings for each canonical key
_ALIASES = {
    'chain_length': ('chain_length', 'chainLength'),
    'component_parameters': ('component_parameters', 'componentParameters'),
}


def get_param(params: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Look up a parameter by canonical name or any accepted alias."""
    for name in _ALIASES.get(key, (key,)):
        if name in params and params[name] is not None:
            return params[name]
    return default


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _tag(value: Any) -> Any:
    return getattr(value, 'value', value)


def _validate_lattice(params: Mapping[str, Any]) -> bool:
    dimension = get_param(params, 'dimension')
    modulus = get_param(params, 'modulus')
    if not _is_int(dimension) or dimension < MIN_LATTICE_DIMENSION:
        return False
    if not _is_int(modulus) or modulus <= 0:
        return False
    return True


def _validate_hash(params: Mapping[str, Any]) -> bool:
    chain_length = get_param(params, 'chain_length')
    return _is_int(chain_length) and chain_length >= MIN_CHAIN_LENGTH


def _validate_multivariate(params: Mapping[str, Any]) -> bool:
    variables = get_param(params, 'variables')
    equations = get_param(params, 'equations')
    if not _is_int(variables) or variables < MIN_VARIABLES:
        return False
    if not _is_int(equations) or equations < variables:
        return False
    return True


def _validate_hybrid(params: Mapping[str, Any]) -> bool:
    algorithms = get_param(params, 'algorithms')
    if not isinstance(algorithms, (list, tuple)) or len(algorithms) < MIN_HYBRID_ALGORITHMS:
        return False
    return all(_tag(algorithm) in BASE_ALGORITHMS for algorithm in algorithms)


_VALIDATORS = {
    'lattice': _validate_lattice,
    'hash': _validate_hash,
    'multivariate': _validate_multivariate,
    'hybrid': _validate_hybrid,
}


def validate_parameters(algorithm: Any, params: Mapping[str, Any]) -> bool:
    """Check numeric ranges for an algorithm's parameters.

    Args:
        algorithm: Algorithm tag or Algorithm member
        params: Parameters to validate

    Returns:
        True if every rule for the algorithm holds; False otherwise,
        including for unknown algorithms and non-mapping params
    """
    tag = _tag(algorithm)
    validator = _VALIDATORS.get(tag) if isinstance(tag, str) else None
    if validator is None or not isinstance(params, Mapping):
        return False
    return validator(params)
