from .detail_view import PhotoDetailView, PhotoViewRegistry
from .layout import DisplaySize, ViewState, fit_within
from .list_view import AuthorRow, AuthorsListView, build_detail_path

__all__ = [
    "AuthorRow",
    "AuthorsListView",
    "DisplaySize",
    "PhotoDetailView",
    "PhotoViewRegistry",
    "ViewState",
    "build_detail_path",
    "fit_within",
]
