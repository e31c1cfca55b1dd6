import pytest

from blockgrid import Block, Edge, LayoutOverflowError, PlacementConflictError, RenderConfig
from blockgrid.diagram_components import GridLayout
from blockgrid.diagram_components.core import Rect


def _layout(blocks, **options):
    return GridLayout(blocks, RenderConfig(**options)).apply()


def test_empty_layout():
    layout = _layout([])
    assert layout.placements == {}
    assert (layout.width, layout.height) == (0, 0)


def test_sparse_coordinates_are_compressed():
    blocks = [
        Block.create("left", -7, 40),
        Block.create("mid", 3, 40),
        Block.create("low", 100, 99),
    ]
    layout = _layout(blocks)

    assert layout.column_widths == (6, 5, 5)
    assert layout.row_heights == (3, 3)
    assert layout.column_offsets == (5, 16, 26)
    assert layout.row_offsets == (3, 9)
    assert (layout.width, layout.height) == (36, 15)
    assert layout.placements["low"].column_rank == 2
    assert layout.placements["low"].row_rank == 1


def test_block_fills_its_column():
    blocks = [Block.create("a", 0, 0), Block.create("wide", 0, 1)]
    layout = _layout(blocks)

    assert layout.rect("a") == Rect(5, 3, 6, 3)
    assert layout.rect("wide") == Rect(5, 9, 6, 3)
    assert layout.placements["a"].text_width == 1


def test_multiline_and_padding_grow_the_box():
    layout = _layout([Block.create("one\nthree", 0, 0)], padding=1)
    placement = layout.placements["one\nthree"]

    assert placement.text_height == 2
    assert placement.text_width == 5
    assert (placement.rect.width, placement.rect.height) == (9, 6)


def test_custom_gutters():
    blocks = [Block.create("a", 0, 0), Block.create("b", 1, 1)]
    layout = _layout(blocks, hmargin=2, vmargin=1)

    assert layout.column_offsets == (2, 7)
    assert layout.row_offsets == (1, 5)
    assert (layout.width, layout.height) == (12, 9)


def test_sparse_mode_keeps_empty_ranks():
    blocks = [Block.create("a", 0, 0), Block.create("b", 2, 0)]
    layout = _layout(blocks, compact=False)

    assert layout.column_widths == (3, 1, 3)
    assert layout.column_offsets == (5, 13, 19)
    assert layout.placements["b"].column_rank == 2


def test_blocked_cells_cover_every_rect():
    blocks = [Block.create("a", 0, 0), Block.create("b", 1, 0)]
    layout = _layout(blocks)

    assert len(layout.blocked) == 2 * 3 * 3
    assert not layout.is_free((5, 3))
    assert layout.is_free((8, 4))
    assert not layout.is_free((-1, 0))
    assert not layout.is_free((layout.width, 0))


def test_placement_conflict_names_both_blocks():
    blocks = [Block.create("a", 1, 2), Block.create("b", 1, 2)]
    with pytest.raises(PlacementConflictError) as excinfo:
        _layout(blocks)

    assert excinfo.value.position == (1, 2)
    assert excinfo.value.block_ids == ("a", "b")
    assert str(excinfo.value) == "Blocks 'a' and 'b' both occupy column 1, row 2."


def test_canvas_limit_is_enforced():
    with pytest.raises(LayoutOverflowError, match="max_canvas_width"):
        _layout([Block.create("hello", 0, 0)], max_canvas_width=10)


def test_huge_sparse_span_fails_before_allocation():
    blocks = [Block.create("a", 0, 0), Block.create("b", 10**9, 0)]
    with pytest.raises(LayoutOverflowError):
        _layout(blocks, compact=False)


def test_huge_coordinates_are_fine_when_compact():
    blocks = [Block.create("a", -(10**9), 0), Block.create("b", 10**9, 0)]
    layout = _layout(blocks)
    assert layout.column_offsets == (5, 13)


def test_sparse_span_is_bounded_even_without_gutters():
    blocks = [Block.create("a", 0, 0), Block.create("b", 10**11, 0)]
    with pytest.raises(LayoutOverflowError, match="columns"):
        _layout(blocks, compact=False, hmargin=0, empty_rank_size=0)


def test_tall_sparse_span_is_bounded():
    blocks = [Block.create("a", 0, 0), Block.create("b", 0, 5000)]
    with pytest.raises(LayoutOverflowError, match="rows"):
        _layout(blocks, compact=False, vmargin=0, empty_rank_size=0)


def test_columns_grow_to_fit_edges_below_a_block():
    blocks = [Block.create("a", 0, 0)] + [Block.create("x", 0, row, id=f"x{row}") for row in range(1, 5)]
    edges = [Edge("a", f"x{row}") for row in range(1, 5)]
    layout = GridLayout(blocks, RenderConfig(), edges).apply()

    assert layout.column_widths == (4,)
    assert layout.rect("a").width == 4


def test_hub_row_grows_for_four_right_edges():
    blocks = [
        Block.create("hub", 0, 0),
        Block.create("t1", 1, -1),
        Block.create("t2", 1, 0),
        Block.create("t3", 1, 1),
        Block.create("t4", 2, 0),
    ]
    edges = [Edge("hub", target) for target in ("t1", "t2", "t3", "t4")]
    layout = GridLayout(blocks, RenderConfig(), edges).apply()

    assert layout.row_heights == (3, 4, 3)
    assert layout.rect("t2").height == 4
