"""Tests for identifier generation."""

import pytest

from storefront.catalog.ids import (
    ASSET_KEY_PREFIX,
    DEFAULT_ALPHABET,
    DEFAULT_SIZE,
    IMAGE_KEY_PREFIX,
    IdGenerator,
)


class TestIdGenerator:
    """Tests for IdGenerator."""

    def test_ids_are_unique(self) -> None:
        """Thousands of consecutive ids never collide."""
        generator = IdGenerator()
        ids = [generator.new_id() for _ in range(5000)]
        assert len(set(ids)) == len(ids)

    def test_fixed_length_and_alphabet(self) -> None:
        """Ids have the configured length and only use the alphabet."""
        value = IdGenerator().new_id()
        assert len(value) == DEFAULT_SIZE
        assert set(value) <= set(DEFAULT_ALPHABET)

    def test_ids_are_case_insensitive_safe(self) -> None:
        """Ids survive case folding unchanged."""
        value = IdGenerator().new_id()
        assert value == value.lower()

    def test_prefix(self) -> None:
        """Prefixes mark the id's kind."""
        generator = IdGenerator()
        assert generator.new_id(IMAGE_KEY_PREFIX).startswith("img_")
        assert generator.new_id(ASSET_KEY_PREFIX).startswith("asset_")
        assert len(generator.new_id(IMAGE_KEY_PREFIX)) == len(IMAGE_KEY_PREFIX) + DEFAULT_SIZE

    def test_custom_alphabet_and_size(self) -> None:
        """Custom alphabet and size are honoured."""
        value = IdGenerator(alphabet="ab", size=32).new_id()
        assert len(value) == 32
        assert set(value) <= {"a", "b"}

    @pytest.mark.parametrize(
        "alphabet,size",
        [("a", 10), ("aaaa", 10), ("0123456789abcdef", 0)],
    )
    def test_invalid_configuration(self, alphabet: str, size: int) -> None:
        """Degenerate generators are rejected."""
        with pytest.raises(ValueError):
            IdGenerator(alphabet=alphabet, size=size)
