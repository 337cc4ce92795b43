"""Ordered collection of saved icons."""

from typing import Iterator, List, Optional

from ..models.schemas import IconArtifact
from ..utils.storage import JsonLibraryStore
from ..utils.logger import get_logger

logger = get_logger(__name__)


class IconLibrary:
    """Icons newest first, at most one entry per id.

    When a store is given every change is written back immediately.
    """

    def __init__(self, store: Optional[JsonLibraryStore] = None):
        self.store = store
        self._icons: List[IconArtifact] = []

    def load(self):
        """Replace the in-memory list with the store's contents."""
        if self.store is None:
            return

        seen = set()
        icons = []
        for icon in self.store.load():
            if icon.id not in seen:
                seen.add(icon.id)
                icons.append(icon)
        self._icons = icons

    @property
    def icons(self) -> List[IconArtifact]:
        return list(self._icons)

    def get(self, icon_id: str) -> Optional[IconArtifact]:
        return next((icon for icon in self._icons if icon.id == icon_id), None)

    def add(self, icon: IconArtifact) -> bool:
        """
        Put an icon at the front of the library.

        Returns:
            False if an icon with the same id is already saved
        """
        if icon.id in self:
            logger.info("Icon already in library", extra={"icon_id": icon.id})
            return False

        icons = [icon] + self._icons
        self._persist(icons)
        self._icons = icons
        logger.info(
            "Icon saved to library",
            extra={"icon_id": icon.id, "count": len(self._icons)}
        )
        return True

    def remove(self, icon_id: str) -> bool:
        """Delete an icon; returns False if it was not saved."""
        remaining = [icon for icon in self._icons if icon.id != icon_id]
        if len(remaining) == len(self._icons):
            return False

        self._persist(remaining)
        self._icons = remaining
        logger.info(
            "Icon deleted from library",
            extra={"icon_id": icon_id, "count": len(self._icons)}
        )
        return True

    def _persist(self, icons: List[IconArtifact]):
        # Callers update self._icons only after this returns
        if self.store is not None:
            self.store.save(icons)

    def __contains__(self, icon_id: object) -> bool:
        return any(icon.id == icon_id for icon in self._icons)

    def __iter__(self) -> Iterator[IconArtifact]:
        return iter(list(self._icons))

    def __len__(self) -> int:
        return len(self._icons)
