from __future__ import annotations

import gc
import logging

import pytest

from glyphgrid import (
    ChangeReason,
    Glyph,
    InvalidArgumentError,
    InvalidCoordinateError,
    PixelGrid,
    Rectangle,
)


def _glyph(*rows: str, index: int = 0) -> Glyph:
    grid = PixelGrid.from_rows(rows)
    return Glyph(grid.width, grid.height, grid.to_bools(), index=index)


class _Font:
    """Minimal stand-in for the owning glyph collection."""


def test_set_pixel_then_shift_right_scenario(recorder) -> None:
    glyph = Glyph(4, 2)
    glyph.add_listener(recorder)

    glyph.set_pixel(0, 0, True)

    assert glyph.get_pixel(0, 0) is True
    assert recorder.summary() == [("PIXEL_CHANGED", (0, 0, 1, 1))]

    glyph.shift_right()

    assert glyph.get_pixel(1, 0) is True
    assert glyph.get_pixel(0, 0) is False
    assert recorder.summary()[1:] == [("SHIFTED", (0, 0, 4, 2))]
    assert recorder.events[1].source is glyph


def test_set_pixel_with_current_value_is_silent(recorder) -> None:
    glyph = _glyph("#.")
    glyph.add_listener(recorder)

    glyph.set_pixel(0, 0, True)
    glyph.set_pixel(1, 0, False)

    assert recorder.events == []


def test_set_pixel_outside_bounds_raises(recorder) -> None:
    glyph = Glyph(2, 2)
    glyph.add_listener(recorder)

    with pytest.raises(InvalidCoordinateError):
        glyph.set_pixel(2, 0, True)
    assert recorder.events == []


@pytest.mark.parametrize(
    "operation, expected",
    [
        ("shift_left", ["#..", ".#.", "#.."]),
        ("shift_right", [".##", ".#.", "..#"]),
        ("shift_up", ["#.#", ".#.", "..."]),
        ("shift_down", ["...", "##.", "#.#"]),
    ],
)
def test_shifts_vacate_exactly_one_edge(operation: str, expected: list[str], recorder) -> None:
    glyph = _glyph(
        "##.",
        "#.#",
        ".#.",
    )
    glyph.add_listener(recorder)

    getattr(glyph, operation)()

    assert glyph.to_rows() == expected
    assert recorder.summary() == [("SHIFTED", (0, 0, 3, 3))]


def test_shift_reports_even_when_content_is_unchanged(recorder) -> None:
    glyph = Glyph(3, 2)
    glyph.add_listener(recorder)

    glyph.shift_up()

    assert recorder.summary() == [("SHIFTED", (0, 0, 3, 2))]


def test_shift_on_empty_glyph_is_a_no_op(recorder) -> None:
    glyph = Glyph(0, 4)
    glyph.add_listener(recorder)

    glyph.shift_left()
    glyph.shift_down()

    assert recorder.events == []


def test_shift_left_then_right_loses_first_column() -> None:
    glyph = _glyph("#.#", "##.")

    glyph.shift_left()
    assert glyph.to_rows() == [".#.", "#.."]

    glyph.shift_right()
    assert glyph.to_rows() == ["..#", ".#."]


def test_shift_single_column_glyph_clears_it() -> None:
    glyph = _glyph("#", "#")

    glyph.shift_right()

    assert glyph.to_rows() == [".", "."]


@pytest.mark.parametrize("position", [0, 1, 3])
def test_remove_column_drops_one_column(position: int, recorder) -> None:
    rows = ("#.##", ".##.", "#..#")
    glyph = _glyph(*rows)
    glyph.add_listener(recorder)
    original = glyph.grid

    glyph.remove_column(position)

    assert glyph.size == (3, 3)
    assert glyph.grid is not original
    expected = [row[:position] + row[position + 1 :] for row in rows]
    assert glyph.to_rows() == expected
    assert recorder.summary() == [("RESIZE", (0, 0, 4, 3))]


@pytest.mark.parametrize("position", [0, 2])
def test_remove_row_drops_one_row(position: int, recorder) -> None:
    rows = ["#.", ".#", "##"]
    glyph = _glyph(*rows)
    glyph.add_listener(recorder)

    glyph.remove_row(position)

    assert glyph.to_rows() == rows[:position] + rows[position + 1 :]
    assert recorder.summary() == [("RESIZE", (0, 0, 2, 3))]


def test_remove_last_column_leaves_zero_width_glyph() -> None:
    glyph = _glyph("#", ".")

    glyph.remove_column(0)

    assert glyph.size == (0, 2)
    assert glyph.is_empty()


@pytest.mark.parametrize("position", [-1, 3])
def test_remove_out_of_range_raises(position: int, recorder) -> None:
    glyph = _glyph("###", "###", "###")
    glyph.add_listener(recorder)

    with pytest.raises(InvalidArgumentError):
        glyph.remove_column(position)
    with pytest.raises(InvalidArgumentError):
        glyph.remove_row(position)
    assert glyph.size == (3, 3)
    assert recorder.events == []


def test_remove_on_empty_glyph_is_a_no_op(recorder) -> None:
    glyph = Glyph()
    glyph.add_listener(recorder)

    glyph.remove_column(5)
    glyph.remove_row(0)

    assert recorder.events == []


def test_reflect_vertical_mirrors_columns_and_is_an_involution(recorder) -> None:
    rows = ["##...", "#.#.#", "...##"]
    glyph = _glyph(*rows)
    glyph.add_listener(recorder)

    glyph.reflect_vertical()
    assert glyph.to_rows() == ["...##", "#.#.#", "##..."]

    glyph.reflect_vertical()
    assert glyph.to_rows() == rows
    assert recorder.summary() == [("COPY", (0, 0, 5, 3)), ("COPY", (0, 0, 5, 3))]


def test_reflect_horizontal_mirrors_rows() -> None:
    glyph = _glyph("#..", ".#.", "..#", "###")

    glyph.reflect_horizontal()

    assert glyph.to_rows() == ["###", "..#", ".#.", "#.."]


def test_reflect_of_symmetric_glyph_is_silent(recorder) -> None:
    glyph = _glyph("#.#", ".#.", "#.#")
    glyph.add_listener(recorder)

    glyph.reflect_vertical()
    glyph.reflect_horizontal()

    assert recorder.events == []


def test_set_index_fires_only_on_change(recorder) -> None:
    glyph = Glyph(2, 2, index=3)
    glyph.add_listener(recorder)

    glyph.set_index(3)
    glyph.set_index(7)

    assert glyph.index == 7
    assert recorder.summary() == [("INDEX_CHANGED", (0, 0, 2, 2))]

    with pytest.raises(InvalidArgumentError):
        glyph.set_index(-1)


def test_set_index_is_ignored_once_attached(recorder) -> None:
    font = _Font()
    glyph = Glyph(1, 1)
    glyph.attach(font, 12)
    glyph.add_listener(recorder)

    glyph.set_index(4)
    glyph.set_index(12)

    assert glyph.index == 12
    assert glyph.parent is font
    assert recorder.events == []


def test_attach_twice_is_rejected() -> None:
    font = _Font()
    glyph = Glyph()
    glyph.attach(font, 0)

    with pytest.raises(InvalidArgumentError):
        glyph.attach(_Font(), 1)
    with pytest.raises(InvalidArgumentError):
        Glyph().attach(font, -2)


def test_parent_and_sibling_links_do_not_keep_targets_alive() -> None:
    font = _Font()
    first, second = Glyph(), Glyph()
    second.attach(font, 1)
    second.link(first, None)

    assert second.prev is first
    assert second.next is None

    del font, first
    gc.collect()

    assert second.parent is None
    assert second.prev is None


def test_resize_fires_with_covering_bounds(recorder) -> None:
    glyph = _glyph("##", "##")
    glyph.add_listener(recorder)

    glyph.set_width(2)
    glyph.set_width(-1)
    glyph.set_width(1)
    glyph.set_height(4)
    glyph.set_size(3, 3)

    assert glyph.to_rows() == ["#..", "#..", "..."]
    assert recorder.summary() == [
        ("RESIZE", (0, 0, 2, 2)),
        ("RESIZE", (0, 0, 1, 4)),
        ("RESIZE", (0, 0, 3, 4)),
    ]


def test_set_array_is_atomic_and_reports_copy(recorder) -> None:
    glyph = _glyph("#.", ".#")
    glyph.add_listener(recorder)

    with pytest.raises(InvalidArgumentError):
        glyph.set_array([True])
    glyph.set_array([True, False, False, True])
    glyph.set_array([False, False, False, True])

    assert glyph.to_rows() == ["..", ".#"]
    assert recorder.summary() == [("COPY", (0, 0, 2, 2))]


def test_set_packed_overwrites_content(recorder) -> None:
    glyph = Glyph(3, 3)
    glyph.add_listener(recorder)

    glyph.set_packed(b"\x05\x01")

    assert glyph.to_rows() == ["#.#", "...", "..#"]
    assert glyph.to_packed() == b"\x05\x01"
    assert recorder.summary() == [("COPY", (0, 0, 3, 3))]


def test_from_packed_constructor() -> None:
    glyph = Glyph.from_packed(2, 2, b"\x09", index=5)

    assert glyph.index == 5
    assert glyph.to_bools() == [True, False, False, True]


def test_copy_from_takes_private_pixels(recorder) -> None:
    source = _glyph("#.", ".#", index=9)
    target = Glyph(2, 2, index=1)
    target.add_listener(recorder)

    target.copy_from(source)
    source.set_pixel(1, 0, True)

    assert target.to_rows() == ["#.", ".#"]
    assert target.index == 1
    assert recorder.summary() == [("COPY", (0, 0, 2, 2))]

    target.copy_from(_glyph("###"))
    assert recorder.summary()[1:] == [("RESIZE", (0, 0, 3, 2))]


def test_clone_and_equals() -> None:
    glyph = _glyph("#.", "##", index=4)
    glyph.add_listener(print)

    twin = glyph.clone()

    assert twin.equals(glyph)
    assert twin.listeners == ()
    assert twin.parent is None
    twin.set_index(5)
    assert not twin.equals(glyph)
    assert not glyph.equals(None)


def test_listener_exception_reaches_the_caller() -> None:
    glyph = Glyph(1, 1)

    def fail(event) -> None:
        raise RuntimeError("repaint failed")

    glyph.add_listener(fail)

    with pytest.raises(RuntimeError, match="repaint failed"):
        glyph.set_pixel(0, 0, True)
    assert glyph.get_pixel(0, 0) is True


def test_remove_listener_stops_delivery(recorder) -> None:
    glyph = Glyph(1, 1)
    glyph.add_listener(recorder)
    glyph.remove_listener(recorder)

    glyph.set_pixel(0, 0, True)

    assert recorder.events == []


def test_negative_index_rejected_on_construction() -> None:
    with pytest.raises(InvalidArgumentError):
        Glyph(index=-1)


def test_fired_events_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    glyph = Glyph(2, 1, index=65)

    with caplog.at_level(logging.DEBUG, logger="glyphgrid"):
        glyph.set_pixel(1, 0, True)

    assert "glyph 65: PIXEL_CHANGED (1, 0, 1, 1)" in caplog.text


def test_event_rectangle_type(recorder) -> None:
    glyph = Glyph(2, 2)
    glyph.add_listener(recorder)

    glyph.set_pixel(1, 1, True)

    assert recorder.events[0].reason is ChangeReason.PIXEL_CHANGED
    assert recorder.events[0].rectangle == Rectangle(1, 1, 1, 1)
