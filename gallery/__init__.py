from gallery.gallery import ImageGallery, build_gallery

__all__ = ["ImageGallery", "build_gallery"]
