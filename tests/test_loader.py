"""Tests for the dataset loaders (bundled data/ files and temporary files)."""

import json
from pathlib import Path

from conference_assistant.ingest.loader import (
    SESSION_COLUMNS,
    load_catalogue,
    load_venue_information,
    read_sessions_frame,
)


def test_read_sessions_frame_bundled_dataset() -> None:
    frame = read_sessions_frame()
    assert list(frame.columns) == SESSION_COLUMNS
    assert len(frame) == 12
    assert frame.iloc[0]["title"] == "Opening Keynote: The Next Decade of Java"


def test_read_sessions_frame_flattens_groups(tmp_path: Path) -> None:
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps([
        {"groupName": "Day 1", "sessions": [{"title": "A", "startsAt": "x", "endsAt": "y"}]},
        {"groupName": "Day 2", "sessions": [{"title": "B"}, {"title": "C", "room": "R"}]},
        {"groupName": "Empty", "sessions": []},
    ]), encoding="utf-8")
    frame = read_sessions_frame(path)
    assert frame["title"].tolist() == ["A", "B", "C"]
    assert list(frame.columns) == SESSION_COLUMNS


def test_read_sessions_frame_accepts_single_object(tmp_path: Path) -> None:
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps({"sessions": [{"title": "Only"}]}), encoding="utf-8")
    assert read_sessions_frame(path)["title"].tolist() == ["Only"]


def test_load_catalogue_matches_venue_sessions() -> None:
    catalogue = load_catalogue()
    venue = json.loads(load_venue_information())
    assert [s.title for s in catalogue] == [s["title"] for s in venue["sessions"]]
    assert catalogue[1].speakers == ("Jeroen Bakker", "Sanne de Wit")
