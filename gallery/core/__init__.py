from gallery.core.duration import parse_duration
from gallery.core.selection import NoImagesError, RandomSelector, RoundRobinSelector

__all__ = ["NoImagesError", "RandomSelector", "RoundRobinSelector", "parse_duration"]
