"""Merkle tree construction and inclusion proofs.

Leaves are raw digests; parents are SHA-256 of the concatenated children.
Odd-length levels pair their last node with itself. Proof paths are plain
lists of sibling digests, and the left/right order at each level is taken
from the parity of the leaf index.
"""

import hashlib
from typing import List, Optional, Sequence, Tuple

from quantum_zkp.errors import EmptyInput


def hash_pair(left: bytes, right: bytes) -> bytes:
    """Combine two child digests into their parent digest."""
    return hashlib.sha256(left + right).digest()


def generate_merkle_tree(leaves: Sequence[bytes]) -> Tuple[List[List[bytes]], bytes]:
    """Build all levels of a Merkle tree.

    Args:
        leaves: Leaf digests

    Returns:
        (levels, root) where levels[0] is the leaf level
    """
    if len(leaves) == 0:
        raise EmptyInput("Cannot generate Merkle tree with no leaves")

    levels = [list(leaves)]
    current_level = list(leaves)

    while len(current_level) > 1:
        next_level = []
        for i in range(0, len(current_level), 2):
            left = current_level[i]
            right = current_level[i + 1] if i + 1 < len(current_level) else left
            next_level.append(hash_pair(left, right))
        levels.append(next_level)
        current_level = next_level

    return levels, current_level[0]


def generate_merkle_proof(levels: Sequence[Sequence[bytes]], index: int) -> List[bytes]:
    """Collect the sibling path for a leaf.

    Args:
        levels: Tree levels from generate_merkle_tree
        index: Leaf index (0-indexed)

    Returns:
        Sibling digests from leaf level up to (excluding) the root
    """
    proof = []
    current_index = index

    for level in levels[:-1]:
        if current_index % 2 == 1:
            sibling_index = current_index - 1
        else:
            sibling_index = current_index + 1

        if sibling_index < len(level):
            proof.append(level[sibling_index])
        else:
            # odd level, the node was paired with itself
            proof.append(level[current_index])

        current_index //= 2

    return proof


def verify_merkle_proof(leaf: bytes, proof: Sequence[bytes], root: bytes, index: int) -> bool:
    """Verify a Merkle inclusion proof.

    Args:
        leaf: Leaf digest to verify
        proof: Sibling digests from generate_merkle_proof
        root: Expected root digest
        index: Index of the leaf in the tree

    Returns:
        True if folding the path reproduces the root exactly
    """
    current_hash = leaf
    current_index = index

    for sibling in proof:
        if current_index % 2 == 1:
            current_hash = hash_pair(sibling, current_hash)
        else:
            current_hash = hash_pair(current_hash, sibling)
        current_index //= 2

    return current_hash == root


class MerkleTree:
    """Merkle tree over a fixed list of leaf digests.

    Provides O(log n) proof generation and verification.
    """

    def __init__(self, leaves: Sequence[bytes]):
        """Build the tree.

        Args:
            leaves: Leaf digests (at least one)
        """
        self.leaves: List[bytes] = list(leaves)
        self.levels, self._root = generate_merkle_tree(self.leaves)

    @property
    def root(self) -> bytes:
        return self._root

    def get_root(self) -> bytes:
        """Get the root digest of the tree."""
        return self._root

    def get_proof(self, index: int) -> List[bytes]:
        """Generate the inclusion proof for a leaf.

        Args:
            index: Index of the leaf (0-indexed)

        Returns:
            Sibling path, or an empty list for an out-of-range index
        """
        if index < 0 or index >= len(self.leaves):
            return []
        return generate_merkle_proof(self.levels, index)

    def verify(self, index: int, leaf: Optional[bytes] = None) -> bool:
        """Verify that a leaf is included at ``index``.

        Args:
            index: Index of the leaf to verify
            leaf: Digest to check (uses the stored leaf if None)

        Returns:
            True if verification passes
        """
        if index < 0 or index >= len(self.leaves):
            return False
        candidate = leaf if leaf is not None else self.leaves[index]
        return verify_merkle_proof(candidate, self.get_proof(index), self._root, index)

    def __len__(self) -> int:
        return len(self.leaves)
