"""
Album search for the albums grid.

Matching happens on the client over the list already loaded from
``GET /albums/``. A result can be pinned so the grid keeps showing it after
the search box is cleared.
"""
from typing import Any, List, Optional, Sequence


def _field(album: Any, name: str) -> Optional[str]:
    if isinstance(album, dict):
        return album.get(name)
    return getattr(album, name, None)


def album_matches(album: Any, term: str, include_description: bool = False) -> bool:
    """Case-insensitive substring match on the name, optionally the description."""
    needle = term.casefold()
    name = _field(album, "name") or ""
    if needle in name.casefold():
        return True
    if include_description:
        description = _field(album, "description")
        return bool(description) and needle in description.casefold()
    return False


def filter_albums(
    albums: Sequence[Any], term: str, include_description: bool = False
) -> List[Any]:
    """
    Albums matching term, in their current order.
    An empty term matches everything.
    """
    if not term:
        return list(albums)
    return [album for album in albums if album_matches(album, term, include_description)]


class AlbumSearch:
    """
    Search box state: the current term, the description toggle and an
    optional pinned result.
    """

    def __init__(self):
        self.term = ""
        self.include_description = False
        self.pinned: Optional[List[Any]] = None

    @property
    def is_pinned(self) -> bool:
        return self.pinned is not None

    def visible(self, albums: Sequence[Any]) -> List[Any]:
        """Albums the grid shows: the pinned result, else the live filter."""
        if self.pinned is not None:
            return list(self.pinned)
        return filter_albums(albums, self.term, self.include_description)

    def pin(self, albums: Sequence[Any]) -> List[Any]:
        """
        Freeze the current result and clear the term.
        Does nothing without a term.
        """
        if not self.term:
            return self.visible(albums)
        self.pinned = filter_albums(albums, self.term, self.include_description)
        self.term = ""
        return list(self.pinned)

    def reset(self) -> None:
        """Clear the term, the toggle and any pinned result."""
        self.term = ""
        self.include_description = False
        self.pinned = None
