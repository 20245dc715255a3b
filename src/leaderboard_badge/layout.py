"""Badge geometry.

Everything here is derived from counts alone (leaderboard length, number of
metric cards, cards per line). Text is never measured; long names are kept in
bounds by the fixed character budgets in :mod:`leaderboard_badge.sanitize`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

WIDTH = 480
PADDING = 20
HEADER_HEIGHT = 56
BLOCK_GAP = 16
CARD_HEIGHT = 56
CARD_GAP = 10
ROW_HEIGHT = 44
ROW_BOX_HEIGHT = 38
FOOTER_HEIGHT = 24

STATS_CARD_COUNT = 4
STATS_COLUMNS = 4

# Offsets inside a row box. The name line runs from NAME_X to the share
# badge and fits USERNAME_LIMIT wide bold glyphs; the commits label sits
# after the track on the bar line.
RANK_CENTER_X = 16
AVATAR_CENTER_X = 52
AVATAR_RADIUS = 14
NAME_X = 76
TRACK_WIDTH = 200
TRACK_HEIGHT = 8
TRACK_Y = 24
MIN_BAR_WIDTH = 4
COMMITS_GAP = 8
NAME_FONT_SIZE = 13
COMMITS_FONT_SIZE = 10
SHARE_BADGE_WIDTH = 56
SHARE_BADGE_HEIGHT = 20
SHARE_BADGE_MARGIN = 8


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: Rect) -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


@dataclass(frozen=True)
class RowGeometry:
    """Positions of the pieces of one leaderboard row."""

    box: Rect
    rank_x: float
    avatar_cx: float
    avatar_cy: float
    avatar_r: float
    name_x: float
    text_baseline: float
    track: Rect
    commits_x: float
    commits_baseline: float
    share_badge: Rect


@dataclass
class BadgeLayout:
    width: float
    height: float
    header: Rect
    stats: Rect
    footer: Rect
    cards: list[Rect] = field(default_factory=list)
    rows: list[RowGeometry] = field(default_factory=list)

    def blocks(self) -> list[Rect]:
        """Top-level blocks in drawing order."""
        return [self.header, self.stats, *(r.box for r in self.rows), self.footer]


def stats_panel_height(card_count: int, columns: int) -> int:
    lines = math.ceil(card_count / columns)
    if lines == 0:
        return 0
    return lines * CARD_HEIGHT + (lines - 1) * CARD_GAP


def row_geometry(box: Rect) -> RowGeometry:
    badge_x = box.right - SHARE_BADGE_MARGIN - SHARE_BADGE_WIDTH
    return RowGeometry(
        box=box,
        rank_x=box.x + RANK_CENTER_X,
        avatar_cx=box.x + AVATAR_CENTER_X,
        avatar_cy=box.y + box.height / 2,
        avatar_r=AVATAR_RADIUS,
        name_x=box.x + NAME_X,
        text_baseline=box.y + 16,
        track=Rect(box.x + NAME_X, box.y + TRACK_Y, TRACK_WIDTH, TRACK_HEIGHT),
        commits_x=box.x + NAME_X + TRACK_WIDTH + COMMITS_GAP,
        commits_baseline=box.y + TRACK_Y + TRACK_HEIGHT,
        share_badge=Rect(
            badge_x,
            box.y + (box.height - SHARE_BADGE_HEIGHT) / 2,
            SHARE_BADGE_WIDTH,
            SHARE_BADGE_HEIGHT,
        ),
    )


def compute_layout(
    leaderboard_length: int,
    stats_card_count: int = STATS_CARD_COUNT,
    stats_columns: int = STATS_COLUMNS,
) -> BadgeLayout:
    """Compute the canvas size and the position of every block."""
    if leaderboard_length < 0 or stats_card_count < 0:
        raise ValueError("counts must not be negative")
    if stats_columns < 1:
        raise ValueError("stats_columns must be at least 1")

    inner_width = WIDTH - 2 * PADDING
    header = Rect(PADDING, PADDING, inner_width, HEADER_HEIGHT)

    stats_top = header.bottom + BLOCK_GAP
    stats = Rect(
        PADDING,
        stats_top,
        inner_width,
        stats_panel_height(stats_card_count, stats_columns),
    )
    card_width = (inner_width - (stats_columns - 1) * CARD_GAP) / stats_columns
    cards = [
        Rect(
            PADDING + (k % stats_columns) * (card_width + CARD_GAP),
            stats_top + (k // stats_columns) * (CARD_HEIGHT + CARD_GAP),
            card_width,
            CARD_HEIGHT,
        )
        for k in range(stats_card_count)
    ]

    rows_top = stats.bottom + BLOCK_GAP
    rows = [
        row_geometry(Rect(PADDING, rows_top + i * ROW_HEIGHT, inner_width, ROW_BOX_HEIGHT))
        for i in range(leaderboard_length)
    ]

    footer = Rect(
        PADDING, rows_top + leaderboard_length * ROW_HEIGHT, inner_width, FOOTER_HEIGHT
    )
    return BadgeLayout(
        width=WIDTH,
        height=footer.bottom + PADDING,
        header=header,
        stats=stats,
        footer=footer,
        cards=cards,
        rows=rows,
    )
