"""
Drag-and-drop reordering with optimistic updates.

The controller moves items locally first so the grid reacts immediately,
then persists the whole sequence. When persisting fails the list is
fetched again from the server and replaces the local state.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from app.utils.ordering import array_move, order_payload

logger = logging.getLogger("app.client.reorder")

PersistFunc = Callable[[List[Dict[str, int]]], Awaitable[Any]]
RefetchFunc = Callable[[], Awaitable[Sequence[Any]]]


class ReorderError(Exception):
    """
    Persisting an order failed. Local state was restored from the server,
    or to the last saved order when the server could not be reached.
    """


def _item_id(item: Any) -> Any:
    if isinstance(item, dict):
        return item["id"]
    return item.id


class ReorderController:
    """
    Owns the local list of albums or photos shown in a sortable grid.

    Args:
        items: Initial items, each with an ``id`` (dict key or attribute)
        persist: Sends ``[{"id", "order"}]`` to the server
        refetch: Loads the authoritative list from the server
        start: First order value written by commit
    """

    def __init__(
        self,
        items: Sequence[Any],
        persist: PersistFunc,
        refetch: RefetchFunc,
        start: int = 0,
    ):
        self.items: List[Any] = list(items)
        self._persist = persist
        self._refetch = refetch
        self._start = start
        # Last order known to match the server
        self._saved: List[Any] = list(self.items)

    def ids(self) -> List[Any]:
        return [_item_id(item) for item in self.items]

    def index_of(self, item_id: Any) -> Optional[int]:
        for index, item in enumerate(self.items):
            if _item_id(item) == item_id:
                return index
        return None

    def move(self, active_id: Any, over_id: Any) -> List[Any]:
        """
        Move the dragged item to the position of the item it was dropped on.
        Nothing happens when both ids are equal or either is unknown.
        """
        if over_id is None or active_id == over_id:
            return self.items
        old_index = self.index_of(active_id)
        new_index = self.index_of(over_id)
        if old_index is None or new_index is None:
            return self.items
        self.items = array_move(self.items, old_index, new_index)
        return self.items

    async def commit(self) -> List[Dict[str, int]]:
        """
        Persist the current order.

        Raises:
            ReorderError: the server rejected the order or could not be
                reached; ``items`` now holds the refetched list, or the last
                saved order if refetching failed too
        """
        payload = order_payload(self.items, start=self._start)
        try:
            await self._persist(payload)
        except Exception as e:
            logger.warning(
                "Reorder failed, restoring server order",
                extra={"event": "reorder", "error_type": type(e).__name__},
            )
            try:
                await self.refresh()
            except Exception as refetch_error:
                logger.error(
                    "Refetch after failed reorder also failed",
                    extra={"event": "reorder", "error_type": type(refetch_error).__name__},
                )
                # Fall back to the last order the server accepted
                self.items = list(self._saved)
            raise ReorderError("Failed to save the new order") from e
        self._saved = list(self.items)
        return payload

    async def refresh(self) -> List[Any]:
        """Replace local state with the server's list."""
        self.items = list(await self._refetch())
        self._saved = list(self.items)
        return self.items

    async def drag_end(self, active_id: Any, over_id: Any) -> bool:
        """
        Handle the end of a drag.

        Returns:
            True if the order changed and was saved
        """
        before = self.ids()
        self.move(active_id, over_id)
        if self.ids() == before:
            return False
        await self.commit()
        return True


def album_reorder_controller(client, albums: Sequence[Any]) -> ReorderController:
    """Controller for the albums grid, persisted through an AlbumsClient."""
    return ReorderController(albums, persist=client.reorder_albums, refetch=client.list_albums)


def photo_reorder_controller(client, album_id: int, photos: Sequence[Any]) -> ReorderController:
    """Controller for one album's photo grid, persisted through an AlbumsClient."""

    async def refetch() -> List[Any]:
        return await client.get_album_photos(album_id)

    return ReorderController(photos, persist=client.reorder_photos, refetch=refetch)
