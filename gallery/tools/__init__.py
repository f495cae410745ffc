from gallery.tools.listing import IMAGE_PATTERN, ImageListingError, list_images

__all__ = ["IMAGE_PATTERN", "ImageListingError", "list_images"]
