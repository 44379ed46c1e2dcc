import logging
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from .errors import InputError

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> Image.Image:
    """Open and fully decode an image file"""
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            loaded = image.copy()
    except FileNotFoundError as e:
        raise InputError(f"Image not found: {path}") from e
    except UnidentifiedImageError as e:
        raise InputError(f"Unrecognized image format: {path}") from e
    except Image.DecompressionBombError as e:
        raise InputError(f"Image too large: {e}") from e
    except (OSError, SyntaxError) as e:
        # Pillow reports some corrupt data as SyntaxError
        raise InputError(f"Cannot read image {path}: {e}") from e

    logger.info(f"📥 Loaded {path.name}: {loaded.width}x{loaded.height} ({loaded.mode})")
    return loaded
