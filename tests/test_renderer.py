"""Tests for the renderer module."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import pytest

from leaderboard_badge.layout import MIN_BAR_WIDTH, TRACK_WIDTH, compute_layout
from leaderboard_badge.models import BadgeSummary, ContributorRecord, LeaderboardEntry
from leaderboard_badge.renderer import (
    bar_width,
    build_scene,
    rank_label,
    render_svg,
    share_label,
)

GENERATED_AT = datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc)


def _entries(*rows: tuple[str, int], total: int | None = None) -> list[LeaderboardEntry]:
    total = sum(n for _, n in rows) if total is None else total
    return [
        LeaderboardEntry(
            rank=i,
            record=ContributorRecord(login, n, f"https://avatars.example/{login}?v=4&s=64"),
            share=n / total if total else 0.0,
        )
        for i, (login, n) in enumerate(rows, 1)
    ]


def _summary(entries: list[LeaderboardEntry], org: str = "acme", **kwargs) -> BadgeSummary:
    defaults = dict(
        org=org,
        repo_count=2,
        contributor_count=len(entries),
        total_commits=sum(e.commits for e in entries),
        top_share=entries[0].share if entries else 0.0,
    )
    defaults.update(kwargs)
    return BadgeSummary(**defaults)


def _texts(node) -> list[str]:
    return [n.text for n in node.find_all("text")]


def test_rank_label():
    assert rank_label(1) == "\U0001F947"
    assert rank_label(2) == "\U0001F948"
    assert rank_label(3) == "\U0001F949"
    assert rank_label(4) == "#4"
    assert rank_label(5) == "#5"


def test_share_label():
    assert share_label(13 / 18) == "72.2%"
    assert share_label(5 / 18) == "27.8%"
    assert share_label(0) == "0.0%"


def test_bar_width():
    assert bar_width(13, 13) == TRACK_WIDTH
    assert bar_width(5, 10) == TRACK_WIDTH / 2
    assert bar_width(0, 13) == MIN_BAR_WIDTH
    assert bar_width(0, 0) == MIN_BAR_WIDTH


def test_scene_structure():
    entries = _entries(("x", 13), ("y", 5))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)

    assert scene.tag == "svg"
    assert [c.attrs.get("id") for c in scene.children if c.tag == "g"] == [
        "header", "stats", "rows", "footer",
    ]
    layout = compute_layout(2)
    assert scene.attrs["width"] == layout.width
    assert scene.attrs["height"] == layout.height
    assert len(scene.find(id="rows").children) == 2


def test_scene_rows_content():
    entries = _entries(("x", 13), ("y", 5))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)

    row0 = _texts(scene.find(id="row-0"))
    row1 = _texts(scene.find(id="row-1"))
    assert row0 == ["\U0001F947", "x", "13 commits", "72.2%"]
    assert row1 == ["\U0001F948", "y", "5 commits", "27.8%"]


def test_scene_commits_label_follows_track():
    entries = _entries(("x", 13), ("y", 5))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)
    geo = compute_layout(2).rows[0]

    name, commits = scene.find(id="row-0").find_all("text")[1:3]
    assert commits.attrs["x"] == geo.commits_x
    assert commits.attrs["y"] == geo.commits_baseline
    assert "text-anchor" not in commits.attrs
    assert name.attrs["y"] == geo.text_baseline
    assert commits.attrs["x"] > geo.track.right


def test_scene_bars_scale_to_top_entry():
    entries = _entries(("x", 10), ("y", 5), ("z", 0))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)

    def fill_width(index: int) -> float:
        return scene.find(id=f"row-{index}").children[-3].attrs["width"]

    assert fill_width(0) == TRACK_WIDTH
    assert fill_width(1) == TRACK_WIDTH / 2
    assert fill_width(2) == MIN_BAR_WIDTH


def test_scene_clip_ids_scoped_by_row():
    entries = _entries(("a", 5), ("b", 4), ("c", 3), ("d", 2), ("e", 1))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)

    clip_ids = [n.attrs["id"] for n in scene.find_all("clipPath")]
    assert clip_ids == [f"avatar-clip-{i}" for i in range(5)]
    images = scene.find_all("image")
    assert [img.attrs["clip-path"] for img in images] == [
        f"url(#avatar-clip-{i})" for i in range(5)
    ]
    assert [img.attrs["href"] for img in images][0] == "https://avatars.example/a?v=4&s=64"


def test_scene_rank_labels_beyond_medals():
    entries = _entries(("a", 5), ("b", 4), ("c", 3), ("d", 2), ("e", 1))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)
    assert _texts(scene.find(id="row-3"))[0] == "#4"
    assert _texts(scene.find(id="row-4"))[0] == "#5"


def test_scene_metric_cards():
    entries = _entries(("x", 13), ("y", 5))
    summary = _summary(entries, repo_count=12, contributor_count=2, total_commits=1800)
    scene = build_scene(summary, entries, GENERATED_AT)

    assert _texts(scene.find(id="stats")) == [
        "Repositories", "12",
        "Contributors", "2",
        "Commits", "1,800",
        "Top share", "72.2%",
    ]


def test_scene_header_and_footer():
    entries = _entries(("x", 1))
    scene = build_scene(_summary(entries), entries, GENERATED_AT)

    assert "acme" in _texts(scene.find(id="header"))[0]
    assert _texts(scene.find(id="footer")) == ["Generated 2024-06-01 12:30 UTC"]


def test_footer_converts_to_utc():
    from datetime import timedelta

    local = datetime(2024, 6, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    entries = _entries(("x", 1))
    scene = build_scene(_summary(entries), entries, local)
    assert _texts(scene.find(id="footer")) == ["Generated 2024-06-01 12:30 UTC"]


def test_render_svg_is_well_formed():
    entries = _entries(("x", 13), ("y", 5))
    svg = render_svg(_summary(entries), entries, GENERATED_AT)

    root = ET.fromstring(svg)
    assert root.tag == "{http://www.w3.org/2000/svg}svg"
    assert "&amp;s=64" in svg


@pytest.mark.parametrize("name", ["<script>alert(1)</script>", "a&b", "\"quoted\" 'single'"])
def test_render_svg_escapes_names(name):
    entries = _entries((name, 3))
    svg = render_svg(_summary(entries, org=name), entries, GENERATED_AT)

    ET.fromstring(svg)
    assert "<script>" not in svg
    assert "a&b" not in svg


def test_render_svg_truncates_long_names():
    login = "l" * 60
    org = "o" * 60
    entries = _entries((login, 3))
    scene = build_scene(_summary(entries, org=org), entries, GENERATED_AT)

    name = _texts(scene.find(id="row-0"))[1]
    assert len(name) == 22
    assert name.endswith("…")
    header = _texts(scene.find(id="header"))[0]
    assert "o" * 31 + "…" in header
    assert "o" * 32 not in header


def test_render_svg_is_deterministic():
    entries = _entries(("x", 13), ("y", 5))
    first = render_svg(_summary(entries), _entries(("x", 13), ("y", 5)), GENERATED_AT)
    second = render_svg(_summary(entries), _entries(("x", 13), ("y", 5)), GENERATED_AT)
    assert first == second


def test_render_svg_differs_only_by_timestamp():
    entries = _entries(("x", 13), ("y", 5))
    first = render_svg(_summary(entries), entries, GENERATED_AT)
    later = render_svg(_summary(entries), entries, datetime(2025, 1, 2, 3, 4, tzinfo=timezone.utc))
    assert first.replace("2024-06-01 12:30", "2025-01-02 03:04") == later
