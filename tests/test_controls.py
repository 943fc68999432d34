import io
import re
import subprocess
from unittest import mock

import pygame
import pytest

from wayboomer.config import Args, Configuration, State
from wayboomer.controls import (
    InputSnapshot,
    ScreenshotError,
    copy_to_clipboard,
    encode_png,
    handle_inputs,
    pan,
    reset,
    resize_flashlight,
    resolve_screenshot_folder,
    save_screenshot,
    screenshot_path,
    toggle_flashlight,
    zoom_at,
)
from wayboomer.draw import Sketch, to_texture_coords

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _surface():
    surface = pygame.Surface((4, 3))
    surface.fill((10, 20, 30))
    surface.set_at((1, 1), (200, 100, 50))
    return surface


def _recording_run(calls):
    def fake_run(command, *args, **kwargs):
        calls.append((command, kwargs))
        return subprocess.CompletedProcess(command, 0)

    return fake_run


def test_reset_restores_state_and_clears_sketch():
    state = State(pan=(5.0, 6.0), zoom=3.0, flashlight_enabled=True, is_drawing=True)
    sketch = Sketch()
    sketch.begin(2.0)
    sketch.add_point((1, 1))
    reset(state, sketch)
    assert state == State()
    assert sketch.lines == []


def test_pan_moves_only_with_left_button():
    state = State(pan=(1.0, 2.0))
    pan(state, (3.0, 4.0), False)
    assert state.pan == (1.0, 2.0)
    pan(state, (3.0, 4.0), True)
    assert state.pan == (4.0, 6.0)


def test_zoom_keeps_point_under_mouse():
    state = State(pan=(10.0, -20.0), zoom=1.5)
    mouse = (123.0, 45.0)
    before = to_texture_coords(mouse, state.pan, state.zoom)
    zoom_at(state, Configuration(), mouse, 2.0)
    after = to_texture_coords(mouse, state.pan, state.zoom)
    assert state.zoom > 1.5
    assert after == pytest.approx(before)


def test_zoom_clamps_to_limits():
    configuration = Configuration()
    state = State()
    zoom_at(state, configuration, (0, 0), 1000.0)
    assert state.zoom == configuration.zoom_max
    zoom_at(state, configuration, (0, 0), -1000.0)
    assert state.zoom == configuration.zoom_min


def test_zoom_without_wheel_does_nothing():
    state = State(pan=(3.0, 4.0), zoom=2.0)
    zoom_at(state, Configuration(), (50, 50), 0)
    assert state == State(pan=(3.0, 4.0), zoom=2.0)


def test_toggle_flashlight_twice_returns_to_start():
    state = State()
    toggle_flashlight(state)
    assert state.flashlight_enabled is True
    toggle_flashlight(state)
    assert state.flashlight_enabled is False


def test_resize_flashlight_clamps():
    configuration = Configuration()
    state = State(flashlight_enabled=True)
    resize_flashlight(state, configuration, 1000.0)
    assert state.flashlight_radius == configuration.flashlight_radius_min
    resize_flashlight(state, configuration, -1000.0)
    assert state.flashlight_radius == configuration.flashlight_radius_max


def test_resize_flashlight_direction():
    state = State(flashlight_enabled=True)
    initial = state.flashlight_radius
    resize_flashlight(state, Configuration(), 1.0)
    assert state.flashlight_radius < initial


def test_resize_flashlight_ignored_when_disabled():
    state = State()
    initial = state.flashlight_radius
    resize_flashlight(state, Configuration(), 3.0)
    assert state.flashlight_radius == initial


def test_resolve_folder_prefers_explicit():
    assert resolve_screenshot_folder("/x/y", {"XDG_PICTURES_DIR": "/p", "HOME": "/h"}) == "/x/y"


def test_resolve_folder_uses_xdg():
    assert resolve_screenshot_folder(None, {"XDG_PICTURES_DIR": "/p", "HOME": "/h"}) == "/p"


def test_resolve_folder_uses_home_pictures(tmp_path):
    (tmp_path / "Pictures").mkdir()
    (tmp_path / "images").mkdir()
    result = resolve_screenshot_folder(None, {"HOME": str(tmp_path)})
    assert result == f"{tmp_path}/Pictures"


def test_resolve_folder_falls_back_to_home(tmp_path):
    assert resolve_screenshot_folder(None, {"HOME": str(tmp_path)}) == str(tmp_path)


def test_resolve_folder_without_environment_fails():
    with pytest.raises(ScreenshotError):
        resolve_screenshot_folder(None, {})


def test_screenshot_path_format():
    assert screenshot_path("/tmp/shots", 1234567) == "/tmp/shots/wayboomer_screenshot_1234567.png"


def test_encode_png_round_trip():
    surface = _surface()
    png = encode_png(surface)
    assert png.startswith(PNG_SIGNATURE)
    loaded = pygame.image.load(io.BytesIO(png), "shot.png")
    assert loaded.get_size() == surface.get_size()
    assert loaded.get_at((1, 1))[:3] == (200, 100, 50)


def test_save_screenshot_writes_file(tmp_path):
    png = encode_png(_surface())
    path = save_screenshot(png, str(tmp_path))
    match = re.fullmatch(re.escape(str(tmp_path)) + r"/wayboomer_screenshot_(\d+)\.png", path)
    assert match
    assert 1000000 <= int(match.group(1)) <= 99999999
    with open(path, "rb") as handle:
        assert handle.read() == png


def test_save_screenshot_missing_folder(tmp_path):
    with pytest.raises(ScreenshotError):
        save_screenshot(b"data", str(tmp_path / "missing"))


def test_copy_to_clipboard_runs_wl_copy():
    surface = _surface()
    png = encode_png(surface)
    assert png.startswith(PNG_SIGNATURE)
    calls = []
    with mock.patch("wayboomer.controls.subprocess.run", side_effect=_recording_run(calls)):
        copy_to_clipboard(png)
    assert len(calls) == 1
    command, kwargs = calls[0]
    assert command == ["wl-copy"]
    assert kwargs["input"] == png
    loaded = pygame.image.load(io.BytesIO(kwargs["input"]), "shot.png")
    assert loaded.get_size() == surface.get_size()
    assert loaded.get_at((1, 1))[:3] == (200, 100, 50)


def test_copy_to_clipboard_missing_program():
    with mock.patch("wayboomer.controls.subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(ScreenshotError):
            copy_to_clipboard(b"png-bytes")


def test_handle_inputs_ctrl_wheel_resizes_flashlight_not_zoom():
    state = State(flashlight_enabled=True)
    initial_radius = state.flashlight_radius
    inputs = InputSnapshot(wheel=1.0, ctrl_down=True, mouse_pos=(10, 10))
    handle_inputs(state, Configuration(), Args(), Sketch(), inputs, _surface())
    assert state.zoom == 1.0
    assert state.flashlight_radius < initial_radius


def test_handle_inputs_drawing_blocks_zoom():
    state = State()
    sketch = Sketch()
    inputs = InputSnapshot(right_down=True, mouse_pos=(7.0, 8.0))
    handle_inputs(state, Configuration(), Args(), sketch, inputs, _surface())
    assert state.is_drawing is True
    assert sketch.lines[0].points == [(7.0, 8.0)]
    handle_inputs(
        state, Configuration(), Args(), sketch,
        InputSnapshot(right_down=True, wheel=2.0, mouse_pos=(9.0, 9.0)), _surface(),
    )
    assert state.zoom == 1.0
    assert len(sketch.lines[0].points) == 2
    handle_inputs(state, Configuration(), Args(), sketch, InputSnapshot(), _surface())
    assert state.is_drawing is False


def test_handle_inputs_reset_and_toggle():
    state = State(pan=(4.0, 4.0), zoom=2.0)
    sketch = Sketch()
    sketch.begin(1.0)
    inputs = InputSnapshot(reset_pressed=True, flashlight_pressed=True)
    handle_inputs(state, Configuration(), Args(), sketch, inputs, _surface())
    assert state.pan == (0.0, 0.0)
    assert state.zoom == 1.0
    assert state.flashlight_enabled is True
    assert sketch.lines == []


def test_handle_inputs_saves_screenshot(tmp_path):
    args = Args(screenshot_folder=str(tmp_path))
    inputs = InputSnapshot(screenshot_down=True, ctrl_down=True)
    handle_inputs(State(), Configuration(), args, Sketch(), inputs, _surface())
    files = list(tmp_path.glob("wayboomer_screenshot_*.png"))
    assert len(files) == 1
    assert files[0].read_bytes().startswith(PNG_SIGNATURE)


def test_handle_inputs_copies_screenshot():
    calls = []
    surface = _surface()
    inputs = InputSnapshot(screenshot_down=True)
    with mock.patch("wayboomer.controls.subprocess.run", side_effect=_recording_run(calls)):
        handle_inputs(State(), Configuration(), Args(), Sketch(), inputs, surface)
    assert len(calls) == 1
    command, kwargs = calls[0]
    assert command == ["wl-copy"]
    png = kwargs["input"]
    assert png.startswith(PNG_SIGNATURE)
    loaded = pygame.image.load(io.BytesIO(png), "shot.png")
    assert loaded.get_size() == surface.get_size()
    assert loaded.get_at((1, 1))[:3] == (200, 100, 50)