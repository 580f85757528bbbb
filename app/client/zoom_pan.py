"""
Zoom and pan model for the photo viewer.

Zoom runs from 100% to 200% in steps of 10. While zoomed in, the image can
be dragged; the drag sets a target offset and ``step()`` eases the shown
offset toward it once per animation frame.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

MIN_ZOOM = 100
MAX_ZOOM = 200
ZOOM_STEP = 10

# Fraction of the remaining distance covered per frame
EASE_FACTOR = 0.1
# Below this distance the offset snaps to its target
SNAP_DISTANCE = 0.1


@dataclass
class ZoomPanState:
    """
    Viewer state. Sizes are in pixels; offsets are relative to the centered
    image. Without container and image sizes offsets are not clamped.
    """

    zoom: int = MIN_ZOOM
    x_offset: float = 0.0
    y_offset: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0
    dragging: bool = False
    start_x: float = 0.0
    start_y: float = 0.0
    container_size: Optional[Tuple[float, float]] = None
    image_size: Optional[Tuple[float, float]] = None

    # ============== Zoom ==============

    def zoom_in(self) -> int:
        self.zoom = min(self.zoom + ZOOM_STEP, MAX_ZOOM)
        return self.zoom

    def zoom_out(self) -> int:
        self.zoom = max(self.zoom - ZOOM_STEP, MIN_ZOOM)
        if self.zoom <= MIN_ZOOM:
            self.reset_offsets()
        else:
            # A smaller image allows less travel
            self.target_x, self.target_y = self.clamp(self.target_x, self.target_y)
        return self.zoom

    def wheel(self, delta_y: float) -> int:
        """Scroll up zooms in, scroll down zooms out."""
        if delta_y < 0:
            return self.zoom_in()
        if delta_y > 0:
            return self.zoom_out()
        return self.zoom

    def reset_offsets(self) -> None:
        self.x_offset = self.y_offset = 0.0
        self.target_x = self.target_y = 0.0

    # ============== Dragging ==============

    def mouse_down(self, x: float, y: float) -> bool:
        """Start dragging; only possible while zoomed in."""
        if self.zoom <= MIN_ZOOM:
            return False
        self.dragging = True
        self.start_x = x - self.target_x
        self.start_y = y - self.target_y
        return True

    def mouse_move(self, x: float, y: float) -> None:
        if not self.dragging or self.zoom <= MIN_ZOOM:
            return
        self.target_x, self.target_y = self.clamp(x - self.start_x, y - self.start_y)

    def mouse_up(self) -> None:
        self.dragging = False

    def mouse_leave(self) -> None:
        self.dragging = False

    # ============== Geometry ==============

    def max_offsets(self) -> Optional[Tuple[float, float]]:
        """
        Largest offset per axis that keeps the image covering the container.

        The image is first fitted into the container the way
        ``object-fit: contain`` does, then scaled by the zoom.
        """
        if not self.container_size or not self.image_size:
            return None
        container_w, container_h = self.container_size
        natural_w, natural_h = self.image_size
        if container_w <= 0 or container_h <= 0 or natural_w <= 0 or natural_h <= 0:
            return None

        image_ratio = natural_w / natural_h
        container_ratio = container_w / container_h
        if image_ratio > container_ratio:
            fitted_w = container_w
            fitted_h = container_w / image_ratio
        else:
            fitted_h = container_h
            fitted_w = container_h * image_ratio

        scaled_w = fitted_w * self.zoom / 100
        scaled_h = fitted_h * self.zoom / 100
        return (
            max(0.0, (scaled_w - container_w) / 2),
            max(0.0, (scaled_h - container_h) / 2),
        )

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        limits = self.max_offsets()
        if limits is None:
            return x, y
        max_x, max_y = limits
        return min(max_x, max(-max_x, x)), min(max_y, max(-max_y, y))

    # ============== Animation ==============

    def step(self) -> bool:
        """
        Advance the eased offsets by one frame.

        Returns:
            True while another frame is needed
        """
        self.x_offset = _ease(self.x_offset, self.target_x)
        self.y_offset = _ease(self.y_offset, self.target_y)
        return self.dragging or not self.settled

    @property
    def settled(self) -> bool:
        return self.x_offset == self.target_x and self.y_offset == self.target_y

    @property
    def transform(self) -> str:
        """CSS transform for the image element."""
        return (
            f"translate({self.x_offset:.2f}px, {self.y_offset:.2f}px) "
            f"scale({self.zoom / 100:.2f})"
        )


def _ease(current: float, target: float) -> float:
    moved = current + (target - current) * EASE_FACTOR
    if abs(target - moved) < SNAP_DISTANCE:
        return target
    return moved
