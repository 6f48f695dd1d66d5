"""Primitive layer for quantum_zkp

This module provides the cryptographic building blocks shared by every engine:
- Secure randomness, hashing and HMAC
- Big-integer modular arithmetic and primality testing
- LWE/RLWE sampling and ring multiplication
- Multivariate polynomial systems
- Merkle trees and hash chains
- Parameter validation
"""

from .utils import (
    to_bytes,
    random_bytes,
    hash_data,
    compute_hmac,
    constant_time_compare,
    generate_random_big_int,
    mod_pow,
    miller_rabin_prime,
    miller_rabin_primality_test,
    generate_large_prime,
    create_hash_chain,
    verify_hash_chain,
    combine_hashes,
    bytes_to_int,
    buffer_to_big_ints,
    big_ints_to_buffer,
    contains_sentinel,
    generate_quantum_safe_challenge,
)

from .merkle import (
    MerkleTree,
    generate_merkle_tree,
    generate_merkle_proof,
    verify_merkle_proof,
)

from .lattice_ops import (
    LWESample,
    generate_discrete_gaussian_error,
    generate_lwe_sample,
    generate_rlwe_polynomial,
    polynomial_multiply,
    inner_product,
)

from .polynomial import (
    SparsePolynomialSystem,
    generate_multivariate_system,
    evaluate_multivariate_polynomial,
    serialize_polynomial_system,
    deserialize_polynomial_system,
)

from .params import validate_parameters

__all__ = [
    # Randomness and hashing
    'to_bytes',
    'random_bytes',
    'hash_data',
    'compute_hmac',
    'constant_time_compare',
    'generate_quantum_safe_challenge',
    # Number theory
    'generate_random_big_int',
    'mod_pow',
    'miller_rabin_prime',
    'miller_rabin_primality_test',
    'generate_large_prime',
    # Hash chains
    'create_hash_chain',
    'verify_hash_chain',
    'combine_hashes',
    # Packing
    'bytes_to_int',
    'buffer_to_big_ints',
    'big_ints_to_buffer',
    'contains_sentinel',
    # Merkle trees
    'MerkleTree',
    'generate_merkle_tree',
    'generate_merkle_proof',
    'verify_merkle_proof',
    # Lattices
    'LWESample',
    'generate_discrete_gaussian_error',
    'generate_lwe_sample',
    'generate_rlwe_polynomial',
    'polynomial_multiply',
    'inner_product',
    # Multivariate systems
    'SparsePolynomialSystem',
    'generate_multivariate_system',
    'evaluate_multivariate_polynomial',
    'serialize_polynomial_system',
    'deserialize_polynomial_system',
    # Validation
    'validate_parameters',
]
