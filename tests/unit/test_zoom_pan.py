"""Tests for the viewer zoom/pan model."""
from app.client.zoom_pan import MAX_ZOOM, MIN_ZOOM, ZoomPanState


def _zoomed(times: int = 5, **kwargs) -> ZoomPanState:
    state = ZoomPanState(**kwargs)
    for _ in range(times):
        state.zoom_in()
    return state


class TestZoom:

    def test_zoom_bounds(self):
        state = ZoomPanState()
        for _ in range(20):
            state.zoom_in()
        assert state.zoom == MAX_ZOOM
        for _ in range(20):
            state.zoom_out()
        assert state.zoom == MIN_ZOOM

    def test_wheel_direction(self):
        state = ZoomPanState()
        assert state.wheel(-120) == 110
        assert state.wheel(0) == 110
        assert state.wheel(120) == 100

    def test_back_to_100_resets_offsets(self):
        state = _zoomed(1)
        state.x_offset, state.y_offset = 5.0, -3.0
        state.target_x, state.target_y = 5.0, -3.0

        state.zoom_out()

        assert (state.x_offset, state.y_offset, state.target_x, state.target_y) == (0, 0, 0, 0)


class TestDragging:

    def test_no_drag_at_100(self):
        state = ZoomPanState()
        assert state.mouse_down(10, 10) is False
        state.mouse_move(50, 50)
        assert (state.target_x, state.target_y) == (0, 0)

    def test_drag_sets_target_relative_to_start(self):
        state = _zoomed()
        state.mouse_down(100, 100)
        state.mouse_move(130, 90)
        assert (state.target_x, state.target_y) == (30, -10)

        state.mouse_up()
        state.mouse_move(500, 500)
        assert (state.target_x, state.target_y) == (30, -10)

    def test_second_drag_continues_from_target(self):
        state = _zoomed()
        state.mouse_down(0, 0)
        state.mouse_move(20, 0)
        state.mouse_leave()

        state.mouse_down(100, 0)
        state.mouse_move(110, 0)

        assert state.target_x == 30

    def test_clamp_with_contain_fit(self):
        # 800x400 image in an 800x600 container is limited by width: 800x400.
        # At 150% it is 1200x600, so it may travel 200px horizontally and 0 vertically.
        state = _zoomed(5, container_size=(800, 600), image_size=(1600, 800))

        assert state.max_offsets() == (200.0, 0.0)
        assert state.clamp(500, 50) == (200.0, 0.0)
        assert state.clamp(-500, -50) == (-200.0, 0.0)

    def test_zoom_out_reclamps_target(self):
        state = _zoomed(10, container_size=(800, 600), image_size=(1600, 800))
        state.target_x = 400.0  # limit at 200%

        state.zoom_out()  # 190%: limit 360

        assert state.target_x == 360.0


class TestEasing:

    def test_step_eases_and_snaps(self):
        state = _zoomed()
        state.target_x = 10.0

        assert state.step() is True
        assert state.x_offset == 1.0

        frames = 0
        while state.step():
            frames += 1
            assert frames < 200
        assert state.x_offset == 10.0
        assert state.settled

    def test_step_keeps_running_while_dragging(self):
        state = _zoomed()
        state.mouse_down(0, 0)
        assert state.step() is True

    def test_transform(self):
        state = _zoomed(5)
        assert state.transform == "translate(0.00px, 0.00px) scale(1.50)"
