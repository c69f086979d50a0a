"""
Command-line tests for the offline ``--score`` path.
"""

import json
import sys

import pytest

from safe_route import cli

from conftest import END, START


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["safe-route", *args])
    cli.main()


class TestScoreFile:
    def test_scores_saved_polyline(self, monkeypatch, tmp_path):
        route = tmp_path / "route.json"
        route.write_text(json.dumps([[START.lat, START.lng], {"lat": END.lat, "lng": END.lng}]))

        _run(monkeypatch, "--score", str(route), "--out", str(tmp_path / "runs"))

        saved = json.loads((tmp_path / "runs" / "last_run.json").read_text())
        assert saved["samples"] == 2
        assert 0 <= saved["score"] <= 100

    def test_accepts_saved_route_object(self, monkeypatch, tmp_path):
        route = tmp_path / "route.json"
        route.write_text(json.dumps({"coordinates": [{"lat": START.lat, "lng": START.lng}]}))

        _run(monkeypatch, "--score", str(route), "--out", str(tmp_path / "runs"))

        assert json.loads((tmp_path / "runs" / "last_run.json").read_text())["samples"] == 1

    @pytest.mark.parametrize(
        "content",
        [
            None,  # missing file
            "{not json",
            json.dumps([{"lat": 42.28}]),
            json.dumps([[42.28]]),
            json.dumps([["north", "west"]]),
            json.dumps(7),
        ],
    )
    def test_unreadable_file_exits_cleanly(self, monkeypatch, tmp_path, capsys, content):
        route = tmp_path / "route.json"
        if content is not None:
            route.write_text(content)

        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, "--score", str(route), "--out", str(tmp_path / "runs"))

        assert exc.value.code == 1
        assert "Route file could not be read" in capsys.readouterr().out
        assert not (tmp_path / "runs").exists()
