from __future__ import annotations

import glob
import os
from typing import List


IMAGE_PATTERN = "*.jpg"


class ImageListingError(RuntimeError):
    """Raised when the images directory cannot be listed."""


def list_images(directory: str, pattern: str = IMAGE_PATTERN) -> List[str]:
    """Return the files in ``directory`` matching ``pattern``, in lexical order.

    Hidden files such as ``.cover.jpg`` are included. An existing directory
    with no matches yields an empty list. A path that does not exist or is
    not a directory is an error.
    """
    root = os.path.normpath(directory)
    if not os.path.isdir(root):
        raise ImageListingError(f"{directory!r} is not a directory")

    # glob.escape keeps literal brackets or asterisks in the directory name
    matches = glob.glob(os.path.join(glob.escape(root), pattern), include_hidden=True)
    return sorted(path for path in matches if os.path.isfile(path))
