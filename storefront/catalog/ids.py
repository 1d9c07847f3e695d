"""Opaque identifier generation for products and stored objects.

Identifiers are short random strings drawn from a lowercase hexadecimal
alphabet. Every call draws fresh randomness from the OS and keeps no
shared state.
"""

import secrets
from dataclasses import dataclass

DEFAULT_ALPHABET = "0123456789abcdef"
DEFAULT_SIZE = 12

IMAGE_KEY_PREFIX = "img_"
ASSET_KEY_PREFIX = "asset_"


@dataclass(frozen=True)
class IdGenerator:
    """Random identifier generator.

    Attributes:
        alphabet: Characters identifiers are drawn from.
        size: Number of random characters per identifier.

    Example usage:
        ids = IdGenerator()
        ids.new_id()                  # "3f9a0c51be27"
        ids.new_id(IMAGE_KEY_PREFIX)  # "img_07d1e4aa9c30"
    """

    alphabet: str = DEFAULT_ALPHABET
    size: int = DEFAULT_SIZE

    def __post_init__(self) -> None:
        if len(set(self.alphabet)) < 2:
            raise ValueError("alphabet needs at least two distinct characters")
        if self.size < 1:
            raise ValueError("size must be positive")

    def new_id(self, prefix: str = "") -> str:
        """Generate a new identifier.

        Args:
            prefix: Optional prefix marking the identifier's kind.

        Returns:
            Prefix followed by `size` random characters.
        """
        return prefix + "".join(secrets.choice(self.alphabet) for _ in range(self.size))
