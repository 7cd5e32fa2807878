"""Write PixelImages to disk for inspection."""

import logging
from pathlib import Path

from ..exceptions import ImageExportError
from ..model.element import PixelImage

logger = logging.getLogger(__name__)


class ImageExporter:
    """Exports images through Pillow; the format follows the file extension."""

    def export(self, image: PixelImage, destination: str | Path) -> Path:
        """Write an image, creating missing parent directories.

        Args:
            image: Image to write
            destination: Target file, typically ending in ``.png``

        Returns:
            Path of the written file

        Raises:
            ImageExportError: If the file cannot be written
        """
        path = Path(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            image.to_pil().save(path)
        except (OSError, ValueError) as e:
            raise ImageExportError(str(e), image_path=str(path)) from e

        logger.info(f"Exported {image!r} to {path}")
        return path
