from .images import decode_image
from .photos import decode_photo_list

__all__ = ["decode_image", "decode_photo_list"]
