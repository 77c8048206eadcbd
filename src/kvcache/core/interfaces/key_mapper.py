"""Key mapper interface."""

from typing import Protocol


class IKeyMapper(Protocol):
    """Contract for mapping cache keys to storage names.

    Key mappers turn arbitrary cache keys into names that are safe to
    use as file names. Mapping must be pure and deterministic, and two
    distinct keys must map to distinct names with overwhelming
    probability.
    """

    def map(self, key: str) -> str:
        """Map a cache key to a storage name.

        Args:
            key: The cache key, any string.

        Returns:
            A filesystem-safe name for the key.
        """
        ...

    def is_mapped_name(self, name: str) -> bool:
        """Check whether a name has the shape ``map`` produces.

        Args:
            name: A file name found in storage.

        Returns:
            True if the name could have been produced by this mapper.
        """
        ...
