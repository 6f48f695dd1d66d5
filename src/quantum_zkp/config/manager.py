"""Configuration management for quantum_zkp"""

import copy
import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from quantum_zkp.types import Algorithm, PROOF_VERSION, freeze

DEFAULT_PROFILES: Dict[str, Dict[str, Any]] = {
    'lattice': {
        'defaults': {
            'dimension': 256,
            'modulus_bits': 1024,
            'error_bound': 8,
            'polynomial_degree': 256,
        },
        'security': {
            'quantum_resistant': True,
            'classical_security': 256,
            'quantum_security': 128,
            'recommended_use': ['learning', 'prototyping'],
        },
        'recommended_for': ['learning lattice cryptography', 'understanding LWE concepts'],
        'limitations': ['educational implementation', 'not production-ready'],
    },
    'hash': {
        'defaults': {
            'chain_length': 1000,
        },
        'security': {
            'quantum_resistant': True,
            'classical_security': 256,
            'quantum_security': 128,
            'recommended_use': ['learning', 'prototyping'],
        },
        'recommended_for': ['learning hash-based cryptography', 'understanding hash chains'],
        'limitations': ['educational implementation', 'not production-ready'],
    },
    'multivariate': {
        'defaults': {
            'variables': 8,
            'equations': 12,
            'degree': 2,
            'response_lanes': 16,
        },
        'security': {
            'quantum_resistant': True,
            'classical_security': 256,
            'quantum_security': 128,
            'recommended_use': ['learning', 'prototyping'],
        },
        'recommended_for': ['learning polynomial cryptography', 'understanding multivariate systems'],
        'limitations': ['educational implementation', 'not production-ready'],
    },
    'hybrid': {
        'defaults': {
            'algorithms': ['lattice', 'hash', 'multivariate'],
            'weights': {'lattice': 0.4, 'hash': 0.3, 'multivariate': 0.2, 'hybrid': 0.1},
            'fallback_weight': 0.25,
        },
        'security': {
            'quantum_resistant': True,
            'classical_security': 512,
            'quantum_security': 256,
            'recommended_use': ['learning', 'prototyping'],
        },
        'recommended_for': ['learning multi-algorithm cryptography', 'understanding defense-in-depth'],
        'limitations': ['educational implementation', 'not production-ready'],
    },
}


@dataclass(frozen=True)
class SecurityLevel:
    """Nominal security labels for an algorithm"""
    quantum_resistant: bool = True
    classical_security: int = 256
    quantum_security: int = 128
    recommended_use: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AlgorithmProfile:
    """Defaults and descriptive metadata for one algorithm"""
    name: Algorithm
    defaults: Mapping[str, Any] = field(default_factory=dict)
    security: SecurityLevel = field(default_factory=SecurityLevel)
    recommended_for: Tuple[str, ...] = ()
    limitations: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'defaults', freeze(self.defaults))

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> 'AlgorithmProfile':
        security = dict(data.get('security') or {})
        security['recommended_use'] = tuple(security.get('recommended_use') or ())
        return cls(
            name=Algorithm.parse(name),
            defaults=data.get('defaults') or {},
            security=SecurityLevel(**security),
            recommended_for=tuple(data.get('recommended_for') or ()),
            limitations=tuple(data.get('limitations') or ()),
        )


@dataclass(frozen=True)
class ZKPConfig:
    """Immutable configuration handed to every engine.

    Build it once (``ZKPConfig.default()`` or ``load_config(path)``) and pass
    it to engine constructors.
    """
    default_algorithm: Algorithm = Algorithm.HASH
    profiles: Mapping[Algorithm, AlgorithmProfile] = field(default_factory=dict)
    version: str = PROOF_VERSION

    def __post_init__(self):
        object.__setattr__(self, 'profiles', MappingProxyType(dict(self.profiles)))

    @classmethod
    def default(cls) -> 'ZKPConfig':
        return cls.from_dict({})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ZKPConfig':
        """Overlay a (possibly partial) mapping onto the built-in defaults.

        Args:
            data: Mapping with optional 'default_algorithm', 'version' and
                'algorithms' (algorithm tag -> profile fields)

        Returns:
            ZKPConfig
        """
        merged = copy.deepcopy(DEFAULT_PROFILES)
        _deep_merge(merged, dict(data.get('algorithms') or {}))
        profiles = {
            Algorithm.parse(name): AlgorithmProfile.from_dict(name, profile)
            for name, profile in merged.items()
        }
        return cls(
            default_algorithm=Algorithm.parse(data.get('default_algorithm', Algorithm.HASH)),
            profiles=profiles,
            version=str(data.get('version', PROOF_VERSION)),
        )

    def profile(self, algorithm) -> AlgorithmProfile:
        return self.profiles[Algorithm.parse(algorithm)]

    def defaults_for(self, algorithm) -> Mapping[str, Any]:
        """Get default parameters for an algorithm"""
        return self.profile(algorithm).defaults

    def security_level(self, algorithm) -> SecurityLevel:
        """Get security labels for an algorithm"""
        return self.profile(algorithm).security


def _deep_merge(target: dict, source: dict):
    """Deep merge source dict into target dict"""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


class ConfigManager:
    """Loads and edits raw configuration before freezing it into a ZKPConfig"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager"""
        self.config: Dict[str, Any] = {}
        if config_path:
            self.load_config(config_path)

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        with open(config_path, 'r') as f:
            self.config = yaml.safe_load(f) or {}
        return self.config

    def load_json_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        with open(config_path, 'r') as f:
            self.config = json.load(f)
        return self.config

    def save_config(self, config_path: str):
        """Save current configuration to YAML file"""
        with open(config_path, 'w') as f:
            yaml.safe_dump(self.config, f, default_flow_style=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports nested keys with dots)"""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default

    def set(self, key: str, value: Any):
        """Set configuration value by key (supports nested keys with dots)"""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration"""
        return copy.deepcopy(self.config)

    def merge_config(self, new_config: Dict[str, Any]):
        """Merge new configuration with existing"""
        _deep_merge(self.config, new_config)

    def to_zkp_config(self) -> ZKPConfig:
        """Freeze the current configuration"""
        return ZKPConfig.from_dict(self.config)


def load_config(config_path: str) -> ZKPConfig:
    """Read a YAML file and build a ZKPConfig from it"""
    return ConfigManager(config_path).to_zkp_config()
