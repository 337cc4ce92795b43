"""Local JSON file storage for the icon library."""

from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from ..models.schemas import IconArtifact
from .logger import get_logger

logger = get_logger(__name__)

_icons_adapter = TypeAdapter(List[IconArtifact])


class JsonLibraryStore:
    """Persists the icon list to a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[IconArtifact]:
        """
        Read saved icons.

        Returns:
            Saved icons, or an empty list if the file is missing or unreadable
        """
        if not self.path.exists():
            return []

        try:
            icons = _icons_adapter.validate_json(self.path.read_bytes())
        except (ValidationError, ValueError, OSError) as e:
            logger.error(
                f"Failed to parse library: {e}",
                extra={"path": str(self.path), "error": str(e)}
            )
            return []

        logger.info(
            f"Loaded {len(icons)} icons",
            extra={"path": str(self.path), "count": len(icons)}
        )
        return icons

    def save(self, icons: List[IconArtifact]):
        """Write the full icon list, replacing the file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(_icons_adapter.dump_json(icons))
        tmp_path.replace(self.path)

        logger.debug(
            f"Saved {len(icons)} icons",
            extra={"path": str(self.path), "count": len(icons)}
        )
