"""
List ordering helpers for drag-and-drop.

Used by the reorder controller on the client side and by the services when
they need to append an item at the end of a sequence.
"""
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """
    Return a new list with the item at old_index moved to new_index.

    Negative indexes count from the end. The input is never mutated.
    """
    result = list(items)
    if not result:
        return result
    size = len(result)
    if not -size <= old_index < size:
        raise IndexError(f"old_index {old_index} out of range for {size} items")
    if new_index < 0:
        new_index += size
    item = result.pop(old_index)
    result.insert(new_index, item)
    return result


def _default_id(item: Any) -> Any:
    if isinstance(item, dict):
        return item["id"]
    return item.id


def order_payload(
    items: Sequence[Any],
    start: int = 0,
    get_id: Callable[[Any], Any] = _default_id,
) -> List[Dict[str, int]]:
    """Sequential ``{"id", "order"}`` pairs for items in their current order."""
    return [
        {"id": get_id(item), "order": index}
        for index, item in enumerate(items, start=start)
    ]


def next_order(current_max: Optional[int]) -> int:
    """Order value for an item appended after current_max."""
    return (current_max or 0) + 1
