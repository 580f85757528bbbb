"""
Utility functions package.
"""
from app.utils.ordering import array_move, next_order, order_payload
from app.utils.retry import retry_with_backoff

__all__ = [
    "array_move",
    "next_order",
    "order_payload",
    "retry_with_backoff",
]
