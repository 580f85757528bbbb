"""
Domain exceptions raised by services.
Routers translate them into HTTP responses.
"""


class PhotoAlbumsError(Exception):
    """Base class for application errors."""


class NotFoundError(PhotoAlbumsError):
    """Requested album or photo does not exist."""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ValidationError(PhotoAlbumsError):
    """Request is well-formed but not acceptable."""


class StorageError(PhotoAlbumsError):
    """Reading or writing the upload directory failed."""


class ProxyError(PhotoAlbumsError):
    """A remote image could not be fetched through the proxy."""
