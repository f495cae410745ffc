from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from gallery.core import RandomSelector, RoundRobinSelector, parse_duration
from gallery.tools import IMAGE_PATTERN, list_images


logger = logging.getLogger("gallery")


class ImageGallery:
    """The startup-time image list plus the two selection policies.

    The image list is fixed at construction and only ever read afterwards.
    """

    def __init__(
        self,
        images: Iterable[str],
        delay: float = 0.0,
        seed: Optional[int] = None,
    ) -> None:
        self.images: Tuple[str, ...] = tuple(images)
        self.delay = delay
        self._random = RandomSelector(seed)
        self._ordered = RoundRobinSelector()

    def __len__(self) -> int:
        return len(self.images)

    @property
    def ordered_served(self) -> int:
        return self._ordered.served

    def random_image(self) -> str:
        return self.images[self._random.pick(len(self.images))]

    def next_image(self) -> str:
        return self.images[self._ordered.pick(len(self.images))]


def build_gallery(
    directory: str,
    delay: str = "0",
    pattern: str = IMAGE_PATTERN,
    seed: Optional[int] = None,
) -> ImageGallery:
    """List ``directory`` once and wrap the result in an ``ImageGallery``.

    Raises ``ImageListingError`` for an unusable directory and ``ValueError``
    for a malformed or negative delay.
    """
    delay_seconds = parse_duration(delay)
    if delay_seconds < 0:
        raise ValueError(f"delay must not be negative, got {delay!r}")

    images = list_images(directory, pattern)
    if images:
        logger.info("Loaded %s image(s) from %s", len(images), directory)
    else:
        logger.warning("No %s files found in %s", pattern, directory)

    return ImageGallery(images, delay=delay_seconds, seed=seed)
