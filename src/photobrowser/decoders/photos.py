from __future__ import annotations

from pydantic import TypeAdapter, ValidationError

from ..domain.models import Photo

_PHOTO_LIST_ADAPTER = TypeAdapter(list[Photo])


def decode_photo_list(data: bytes) -> list[Photo] | None:
    """Decode a JSON array of photo records, all or nothing.

    One malformed element discards the whole payload, mirroring the list
    endpoint contract.
    """
    try:
        return _PHOTO_LIST_ADAPTER.validate_json(data)
    except ValidationError:
        return None
