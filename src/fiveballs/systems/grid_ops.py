from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from esper import World

from fiveballs.components.ball import Ball
from fiveballs.components.ball_palette import BallPalette, BallPaletteRegistry
from fiveballs.components.board import Board
from fiveballs.components.board_position import BoardPosition
from fiveballs.errors import CellOccupiedError, EmptySourceError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Snapshot = Tuple[Tuple[Optional[Ball], ...], ...]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_palette(world: World) -> BallPalette:
    for entity, _ in world.get_component(BallPaletteRegistry):
        return world.component_for_entity(entity, BallPalette)
    raise RuntimeError("BallPalette definitions not found")


def world_rng(world: World, rng: random.Random | None = None) -> random.Random:
    candidate = rng or getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def create_board(world: World, size: int) -> int:
    """Create the board entity plus one cell entity per coordinate."""
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}")
    board = Board(size=size)
    board_entity = world.create_entity(board)
    for y in range(size):
        for x in range(size):
            board.cells[(x, y)] = world.create_entity(BoardPosition(x=x, y=y))
    return board_entity


def get_entity_at(world: World, x: int, y: int) -> int:
    board = get_board(world)
    if not board.in_bounds(x, y):
        raise IndexError(f"Cell ({x}, {y}) is outside a {board.size}x{board.size} grid")
    return board.cells[(x, y)]


def cell_at(world: World, x: int, y: int) -> Ball | None:
    entity = get_entity_at(world, x, y)
    if world.has_component(entity, Ball):
        return world.component_for_entity(entity, Ball)
    return None


def is_empty(world: World, x: int, y: int) -> bool:
    return cell_at(world, x, y) is None


def place_ball_at(world: World, x: int, y: int, color: str) -> Ball:
    entity = get_entity_at(world, x, y)
    if world.has_component(entity, Ball):
        raise CellOccupiedError(x, y)
    ball = Ball(id=get_board(world).next_ball_id(), color=color)
    world.add_component(entity, ball)
    logger.debug("Placed ball %s at (%d, %d)", ball, x, y)
    return ball


def place_ball_random(
    world: World, color: str, *, rng: random.Random | None = None
) -> Tuple[Ball, Position] | None:
    """Place a ball on a random empty cell using at most size*size coordinate draws.

    Returns (ball, (x, y)) on success or None when every draw hit an occupied cell.
    """
    board = get_board(world)
    rng = world_rng(world, rng)
    for _ in range(board.size * board.size):
        y = rng.randrange(board.size)
        x = rng.randrange(board.size)
        if is_empty(world, x, y):
            return place_ball_at(world, x, y, color), (x, y)
    logger.warning("Could not find an empty cell for a %s ball", color)
    return None


def place_random_balls(
    world: World,
    count: int,
    *,
    colors: Sequence[str] | None = None,
    rng: random.Random | None = None,
) -> List[Tuple[Ball, Position]]:
    """Place up to count balls on uniformly chosen empty cells.

    Colors come from `colors` when given, otherwise each is drawn from the palette.
    Stops early only when the grid has no empty cell left.
    """
    rng = world_rng(world, rng)
    palette = None if colors is not None else get_palette(world).color_names()
    placed: List[Tuple[Ball, Position]] = []
    for index in range(count):
        free = empty_cells(world)
        if not free:
            logger.warning("Grid full after placing %d of %d balls", index, count)
            break
        x, y = rng.choice(free)
        color = colors[index] if colors is not None else rng.choice(palette)
        placed.append((place_ball_at(world, x, y, color), (x, y)))
    return placed


def move_ball(world: World, from_x: int, from_y: int, to_x: int, to_y: int) -> Ball:
    src_entity = get_entity_at(world, from_x, from_y)
    dst_entity = get_entity_at(world, to_x, to_y)
    if not world.has_component(src_entity, Ball):
        raise EmptySourceError(from_x, from_y)
    if world.has_component(dst_entity, Ball):
        raise CellOccupiedError(to_x, to_y)
    ball = world.component_for_entity(src_entity, Ball)
    world.remove_component(src_entity, Ball)
    world.add_component(dst_entity, ball)
    logger.debug("Moved ball %s from (%d, %d) to (%d, %d)", ball, from_x, from_y, to_x, to_y)
    return ball


def clear_cells(world: World, coords: Iterable[Position]) -> List[Position]:
    """Empty every listed cell and return the ones that actually held a ball."""
    cleared: List[Position] = []
    for x, y in coords:
        entity = get_entity_at(world, x, y)
        if world.has_component(entity, Ball):
            world.remove_component(entity, Ball)
            cleared.append((x, y))
    return cleared


def ball_map(world: World) -> Dict[Position, Ball]:
    """Return mapping of occupied positions to their balls."""
    mapping: Dict[Position, Ball] = {}
    for _, (position, ball) in world.get_components(BoardPosition, Ball):
        mapping[(position.x, position.y)] = ball
    return mapping


def empty_cells(world: World) -> List[Position]:
    board = get_board(world)
    occupied = ball_map(world)
    return [
        (x, y)
        for y in range(board.size)
        for x in range(board.size)
        if (x, y) not in occupied
    ]


def is_full(world: World) -> bool:
    board = get_board(world)
    return len(ball_map(world)) >= board.size * board.size


def snapshot(world: World) -> Snapshot:
    """Row-major, immutable view of the grid for rendering."""
    board = get_board(world)
    occupied = ball_map(world)
    return tuple(
        tuple(occupied.get((x, y)) for x in range(board.size))
        for y in range(board.size)
    )


def walkable_map(world: World) -> List[List[int]]:
    """Row-major traversability matrix: 0 for empty cells, 1 for occupied ones."""
    return [[0 if cell is None else 1 for cell in row] for row in snapshot(world)]


def format_grid(world: World) -> str:
    """Human-readable dump of the grid, two letters per ball and '..' for empty cells."""
    lines: List[str] = []
    for y, row in enumerate(snapshot(world)):
        cells = [".." if ball is None else ball.color[:2] for ball in row]
        lines.append(f"{y}: " + " ".join(cells))
    return "\n".join(lines)
