"""Base feature interface for repository features"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blogstore.store import Table


class RepositoryFeature:
    """
    Base class for repository features.

    Features hook into repository lifecycle events to add functionality
    like slug generation or publication bookkeeping.
    """

    def before_create(self, data: dict[str, Any], table: "Table") -> dict[str, Any]:
        """
        Hook called before creating an entity.

        Args:
            data: Entity data dictionary
            table: The table the entity is about to be inserted into

        Returns:
            Modified data dictionary
        """
        return data

    def before_update(
        self, data: dict[str, Any], current: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Hook called before updating an entity.

        Args:
            data: Update data dictionary (only the fields being changed)
            current: The stored row as it is before the update

        Returns:
            Modified data dictionary
        """
        return data
