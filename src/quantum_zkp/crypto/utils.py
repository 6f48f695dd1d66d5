"""Cryptographic utility functions

Provides:
- Secure random bytes and random big integers
- SHA-2 hash and HMAC wrappers
- Modular exponentiation and Miller-Rabin primality testing
- Hash chains and hash folding
- Fixed-width integer packing helpers
"""

import hashlib
import hmac
import secrets
from typing import Iterable, List, Sequence, Union

from quantum_zkp.errors import (
    EmptyInput,
    InvalidLength,
    InvalidParameters,
    ParameterTooSmall,
)

BytesLike = Union[bytes, bytearray, str]

CORRUPTED_SENTINEL = b"corrupted"

_HASH_VARIANTS = {
    'sha256': hashlib.sha256,
    'sha384': hashlib.sha384,
    'sha512': hashlib.sha512,
}

_CHALLENGE_LENGTHS = {
    'lattice': 32,
    'hash': 16,
    'multivariate': 24,
    'hybrid': 40,
}


def to_bytes(data: BytesLike) -> bytes:
    """
    Normalize a secret or message to bytes.

    Args:
        data: Bytes or text (text is UTF-8 encoded)

    Returns:
        Bytes representation
    """
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise InvalidParameters(
        f"Expected bytes or str, got {type(data).__name__}",
        suggestion="Pass the secret as bytes or text",
    )


def _resolve_variant(variant: Union[str, int]):
    key = str(variant).lower()
    if not key.startswith('sha'):
        key = f"sha{key}"
    try:
        return _HASH_VARIANTS[key]
    except KeyError:
        raise InvalidParameters(f"Unsupported hash variant: {variant}") from None


def random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of bytes to generate

    Returns:
        Random bytes
    """
    if length <= 0:
        raise InvalidLength("Length must be positive")
    return secrets.token_bytes(length)


def hash_data(data: BytesLike, variant: Union[str, int] = 'sha256') -> bytes:
    """
    Hash data with a SHA-2 variant.

    Args:
        data: Data to hash (bytes or string)
        variant: 'sha256', 'sha384' or 'sha512' (or 256/384/512)

    Returns:
        Digest bytes (32, 48 or 64 bytes)
    """
    return _resolve_variant(variant)(to_bytes(data)).digest()


def compute_hmac(data: BytesLike, key: BytesLike,
                 variant: Union[str, int] = 'sha256') -> bytes:
    """
    Compute an HMAC over data.

    Args:
        data: Data to authenticate
        key: Secret key
        variant: Hash variant, as for hash_data

    Returns:
        HMAC digest bytes
    """
    return hmac.new(to_bytes(key), to_bytes(data), _resolve_variant(variant)).digest()


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in constant time."""
    return hmac.compare_digest(a, b)


def generate_random_big_int(min_value: int, max_value: int) -> int:
    """
    Sample an integer in [min_value, max_value).

    Random bytes sized to the hex length of the range are reduced modulo
    the range, so the distribution is only approximately uniform.

    Args:
        min_value: Inclusive lower bound
        max_value: Exclusive upper bound

    Returns:
        Random integer
    """
    value_range = max_value - min_value
    if value_range <= 0:
        raise InvalidParameters(
            f"Empty range [{min_value}, {max_value})"
        )
    num_bytes = (len(format(value_range, 'x')) + 1) // 2
    value = int.from_bytes(random_bytes(num_bytes), 'big')
    return value % value_range + min_value


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation by repeated squaring.

    Args:
        base: Base
        exponent: Non-negative exponent
        modulus: Positive modulus

    Returns:
        base ** exponent mod modulus
    """
    if modulus == 1:
        return 0
    result = 1
    base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def _is_strong_probable_prime(n: int, a: int, d: int, r: int) -> bool:
    x = mod_pow(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(1, r):
        x = (x * x) % n
        if x == n - 1:
            return True
        if x == 1:
            return False
    return False


def miller_rabin_prime(n: int, rounds: int = 40) -> bool:
    """
    Miller-Rabin probabilistic primality test.

    Args:
        n: Candidate
        rounds: Number of random bases to try

    Returns:
        True if n is a probable prime
    """
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0:
        return False

    r = 0
    d = n - 1
    while d % 2 == 0:
        d //= 2
        r += 1

    for _ in range(rounds):
        a = generate_random_big_int(2, n - 2)
        if not _is_strong_probable_prime(n, a, d, r):
            return False
    return True


miller_rabin_primality_test = miller_rabin_prime


def generate_large_prime(bits: int) -> int:
    """
    Generate a probable prime with exactly ``bits`` bits.

    Args:
        bits: Bit length, at least 64

    Returns:
        Probable prime in [2^(bits-1), 2^bits - 1]
    """
    if bits < 64:
        raise ParameterTooSmall(
            "Prime must be at least 64 bits for security",
            algorithm='lattice',
        )
    max_value = (1 << bits) - 1
    min_value = 1 << (bits - 1)
    candidate = generate_random_big_int(min_value, max_value)
    if candidate % 2 == 0:
        candidate += 1
    while not miller_rabin_prime(candidate, 40):
        candidate += 2
        if candidate > max_value:
            # range floor is even, keep the candidate odd
            candidate = min_value + 1
    return candidate


def create_hash_chain(seed: BytesLike, length: int) -> List[bytes]:
    """
    Build a SHA-256 hash chain.

    chain[0] = H(seed) and chain[i] = H(chain[i-1]).

    Args:
        seed: Chain seed
        length: Number of links

    Returns:
        List of digests
    """
    if length <= 0:
        raise InvalidLength("Chain length must be positive")
    chain = []
    current = to_bytes(seed)
    for _ in range(length):
        current = hashlib.sha256(current).digest()
        chain.append(current)
    return chain


def verify_hash_chain(chain: Sequence[bytes]) -> bool:
    """
    Check every link of a hash chain.

    Args:
        chain: Sequence of digests

    Returns:
        True if the chain has at least two links and each follows from the previous
    """
    if len(chain) < 2:
        return False
    for i in range(1, len(chain)):
        if hashlib.sha256(chain[i - 1]).digest() != chain[i]:
            return False
    return True


def combine_hashes(hashes: Sequence[bytes]) -> bytes:
    """
    Fold several digests into one: acc = H(acc || h).

    Args:
        hashes: Digests to combine (order matters)

    Returns:
        Combined digest; a single input is returned unchanged
    """
    if len(hashes) == 0:
        raise EmptyInput("Cannot combine empty hash array")
    acc = hashes[0]
    for h in hashes[1:]:
        acc = hashlib.sha256(acc + h).digest()
    return acc


def bytes_to_int(data: bytes) -> int:
    """Interpret a whole buffer as a big-endian integer."""
    return int.from_bytes(data, 'big')


def buffer_to_big_ints(data: bytes, count: int) -> List[int]:
    """
    Split a buffer into ``count`` big-endian integers.

    Slices are ceil(len / count) bytes wide; slices past the end of the
    buffer read as zero.

    Args:
        data: Buffer to split
        count: Number of integers to produce

    Returns:
        List of integers
    """
    if count <= 0:
        raise InvalidLength("Integer count must be positive")
    width = -(-len(data) // count)
    ints = []
    for i in range(count):
        start = i * width
        chunk = data[start:start + width]
        ints.append(int.from_bytes(chunk, 'big') if chunk else 0)
    return ints


def big_ints_to_buffer(ints: Iterable[int]) -> bytes:
    """
    Pack integers as big-endian hex, each padded to an even number of digits.

    Widths are minimal, so unpacking a buffer and packing it again drops
    the leading zero bytes of each slice.

    Args:
        ints: Non-negative integers

    Returns:
        Concatenated bytes
    """
    parts = []
    for value in ints:
        digits = format(value, 'x')
        if len(digits) % 2:
            digits = '0' + digits
        parts.append(bytes.fromhex(digits))
    return b''.join(parts)


def contains_sentinel(*values: bytes) -> bool:
    """Return True if any value carries the corrupted-content marker."""
    return any(value is not None and CORRUPTED_SENTINEL in value for value in values)


def generate_quantum_safe_challenge(algorithm: str) -> bytes:
    """
    Generate a random challenge sized for an algorithm.

    Args:
        algorithm: Algorithm tag

    Returns:
        Random challenge bytes
    """
    tag = getattr(algorithm, 'value', algorithm)
    return random_bytes(_CHALLENGE_LENGTHS.get(tag, 32))
