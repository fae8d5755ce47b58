"""Publication feature keeping ``published`` and ``published_at`` consistent"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from blogstore.features.base_feature import RepositoryFeature

if TYPE_CHECKING:
    from blogstore.store import Table


class PublicationFeature(RepositoryFeature):
    """
    Feature that manages the draft -> published transition.

    ``published_at`` is set if and only if ``published`` is true, and it is
    set exactly once, at the moment the entity becomes published. Callers
    cannot write ``published_at`` directly and there is no way back to draft.
    """

    @staticmethod
    def _get_current_timestamp() -> datetime:
        """Get current UTC timestamp as a datetime object"""
        return datetime.now(UTC)

    def before_create(self, data: dict[str, Any], table: "Table") -> dict[str, Any]:
        if data.get("published"):
            # Seeded records may carry their historical publication time
            if data.get("published_at") is None:
                data["published_at"] = self._get_current_timestamp()
        else:
            data["published"] = False
            data["published_at"] = None
        return data

    def before_update(
        self, data: dict[str, Any], current: dict[str, Any]
    ) -> dict[str, Any]:
        data.pop("published_at", None)
        if "published" not in data:
            return data

        was_published = bool(current.get("published"))
        if data["published"] is None or bool(data["published"]) == was_published:
            data.pop("published")
            return data
        if was_published:
            raise ValueError("A published post cannot be moved back to draft")

        data["published"] = True
        data["published_at"] = self._get_current_timestamp()
        return data
