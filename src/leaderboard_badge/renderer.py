"""SVG badge renderer."""

from __future__ import annotations

from datetime import datetime, timezone

from .layout import (
    COMMITS_FONT_SIZE,
    MIN_BAR_WIDTH,
    NAME_FONT_SIZE,
    TRACK_WIDTH,
    BadgeLayout,
    Rect,
    compute_layout,
)
from .leaderboard import max_commits
from .models import BadgeSummary, LeaderboardEntry
from .sanitize import ORG_NAME_LIMIT, USERNAME_LIMIT, escape_markup, sanitize
from .svg import SVG_NS, SvgNode, element

CAPTION = "Top contributors across all repositories"
FONT_FAMILY = "Segoe UI, Helvetica, Arial, sans-serif"

_BACKGROUND = "#1E1E2F"
_PANEL = "#2E2E4D"
_TRACK = "#3B3B5C"
_ACCENT = "#FFD700"
_BAR = "#58A6FF"
_TEXT = "#FFFFFF"
_MUTED = "#A0A0C0"

_MEDALS = {1: "\U0001F947", 2: "\U0001F948", 3: "\U0001F949"}


def rank_label(rank: int) -> str:
    return _MEDALS.get(rank, f"#{rank}")


def share_label(share: float) -> str:
    return f"{share * 100:.1f}%"


def bar_width(commits: int, top_commits: int, track_width: float = TRACK_WIDTH) -> float:
    """Filled width of a contributor bar; never narrower than MIN_BAR_WIDTH."""
    filled = commits / max(1, top_commits) * track_width
    return min(track_width, max(MIN_BAR_WIDTH, filled))


def clip_id(index: int) -> str:
    return f"avatar-clip-{index}"


def _format_number(n: int) -> str:
    return f"{n:,}"


def _metric_cards(summary: BadgeSummary) -> list[tuple[str, str]]:
    return [
        ("Repositories", _format_number(summary.repo_count)),
        ("Contributors", _format_number(summary.contributor_count)),
        ("Commits", _format_number(summary.total_commits)),
        ("Top share", share_label(summary.top_share)),
    ]


def _header(box: Rect, org: str) -> SvgNode:
    group = element("g", id="header")
    group.add(element(
        "text",
        f"Top contributors · {sanitize(org, ORG_NAME_LIMIT)}",
        x=box.x, y=box.y + 24,
        font_size=18, font_weight="bold", fill=_ACCENT,
    ))
    group.add(element(
        "text", escape_markup(CAPTION),
        x=box.x, y=box.y + 44, font_size=12, fill=_MUTED,
    ))
    return group


def _stats(cards: list[Rect], summary: BadgeSummary) -> SvgNode:
    group = element("g", id="stats")
    for box, (label, value) in zip(cards, _metric_cards(summary)):
        card = group.add(element("g"))
        card.add(element(
            "rect", x=box.x, y=box.y, width=box.width, height=box.height,
            rx=6, ry=6, fill=_PANEL,
        ))
        card.add(element(
            "text", escape_markup(label),
            x=box.x + 10, y=box.y + 20, font_size=11, fill=_MUTED,
        ))
        card.add(element(
            "text", escape_markup(value),
            x=box.x + 10, y=box.y + 44, font_size=18, font_weight="bold", fill=_TEXT,
        ))
    return group


def _row(index: int, layout: BadgeLayout, entry: LeaderboardEntry, top: int) -> SvgNode:
    geo = layout.rows[index]
    box = geo.box
    group = element("g", id=f"row-{index}")
    group.add(element(
        "rect", x=box.x, y=box.y, width=box.width, height=box.height,
        rx=5, ry=5, fill=_PANEL,
    ))
    group.add(element(
        "text", escape_markup(rank_label(entry.rank)),
        x=geo.rank_x, y=geo.avatar_cy + 5,
        font_size=14, font_weight="bold", fill=_ACCENT, text_anchor="middle",
    ))
    size = geo.avatar_r * 2
    group.add(element(
        "circle", cx=geo.avatar_cx, cy=geo.avatar_cy, r=geo.avatar_r, fill=_TRACK,
    ))
    group.add(element(
        "image",
        href=entry.avatar_url,
        x=geo.avatar_cx - geo.avatar_r, y=geo.avatar_cy - geo.avatar_r,
        width=size, height=size,
        clip_path=f"url(#{clip_id(index)})",
    ))
    group.add(element(
        "text", sanitize(entry.login, USERNAME_LIMIT),
        x=geo.name_x, y=geo.text_baseline, font_size=NAME_FONT_SIZE, font_weight="bold", fill=_TEXT,
    ))
    group.add(element(
        "text", f"{entry.commits} commits",
        x=geo.commits_x, y=geo.commits_baseline,
        font_size=COMMITS_FONT_SIZE, fill=_MUTED,
    ))
    track = geo.track
    group.add(element(
        "rect", x=track.x, y=track.y, width=track.width, height=track.height,
        rx=4, ry=4, fill=_TRACK,
    ))
    group.add(element(
        "rect", x=track.x, y=track.y, width=bar_width(entry.commits, top, track.width),
        height=track.height, rx=4, ry=4, fill=_BAR,
    ))
    badge = geo.share_badge
    group.add(element(
        "rect", x=badge.x, y=badge.y, width=badge.width, height=badge.height,
        rx=10, ry=10, fill=_ACCENT,
    ))
    group.add(element(
        "text", share_label(entry.share),
        x=badge.x + badge.width / 2, y=badge.y + 14,
        font_size=11, font_weight="bold", fill=_BACKGROUND, text_anchor="middle",
    ))
    return group


def _footer(box: Rect, generated_at: datetime) -> SvgNode:
    group = element("g", id="footer")
    group.add(element(
        "text", f"Generated {generated_at:%Y-%m-%d %H:%M} UTC",
        x=box.x + box.width, y=box.y + 16,
        font_size=10, fill=_MUTED, text_anchor="end",
    ))
    return group


def build_scene(
    summary: BadgeSummary,
    entries: list[LeaderboardEntry],
    generated_at: datetime | None = None,
) -> SvgNode:
    """Build the badge document tree for a non-empty leaderboard."""
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    elif generated_at.tzinfo is not None:
        generated_at = generated_at.astimezone(timezone.utc)

    cards = _metric_cards(summary)
    layout = compute_layout(len(entries), stats_card_count=len(cards))
    top = max_commits(entries)

    root = element(
        "svg",
        xmlns=SVG_NS,
        width=layout.width,
        height=layout.height,
        viewBox=f"0 0 {layout.width} {layout.height}",
        role="img",
        font_family=FONT_FAMILY,
    )
    root.add(element("title", f"Top contributors of {sanitize(summary.org, ORG_NAME_LIMIT)}"))

    defs = root.add(element("defs"))
    for i, geo in enumerate(layout.rows):
        clip = defs.add(element("clipPath", id=clip_id(i)))
        clip.add(element("circle", cx=geo.avatar_cx, cy=geo.avatar_cy, r=geo.avatar_r))

    root.add(element(
        "rect", width="100%", height="100%", rx=10, ry=10, fill=_BACKGROUND,
    ))
    root.add(_header(layout.header, summary.org))
    root.add(_stats(layout.cards, summary))
    rows = root.add(element("g", id="rows"))
    for i, entry in enumerate(entries):
        rows.add(_row(i, layout, entry, top))
    root.add(_footer(layout.footer, generated_at))
    return root


def render_svg(
    summary: BadgeSummary,
    entries: list[LeaderboardEntry],
    generated_at: datetime | None = None,
) -> str:
    """Render the badge as a standalone SVG document."""
    return build_scene(summary, entries, generated_at).to_xml() + "\n"
