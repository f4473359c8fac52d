import io

import pytest

from treasurehunt.hub import (
    Monitor,
    MonitorError,
    calculate_scores,
    count_treasures,
    hunt_summary,
    main,
)
from treasurehunt.manager import add_treasure, treasure_file
from treasurehunt.records import Treasure
from treasurehunt.score import compute_scores, format_scores


@pytest.fixture
def root(tmp_path):
    add_treasure(tmp_path, "alpha", Treasure("t1", "ana", 1.5, 2.25, "tree", 10))
    add_treasure(tmp_path, "alpha", Treasure("t2", "bob", 3.0, 4.0, "rock", 5))
    add_treasure(tmp_path, "alpha", Treasure("t3", "ana", 0.0, 0.0, "lake", 7))
    add_treasure(tmp_path, "beta", Treasure("b1", "cid", 9.0, 9.0, "hill", 3))
    (tmp_path / ".git").mkdir()
    return tmp_path


def test_count_treasures(root):
    assert count_treasures(root, "alpha") == 3
    assert count_treasures(root, "beta") == 1


def test_count_treasures_missing_hunt(root):
    assert count_treasures(root, "nothing") == 0


def test_hunt_summary(root):
    text = hunt_summary(root)
    assert "Hunt name: alpha\nNumber of treasures: 3\n" in text
    assert "Hunt name: beta\nNumber of treasures: 1\n" in text
    assert ".git" not in text


def test_calculate_scores_matches_score_module(root):
    expected = format_scores("alpha", compute_scores(treasure_file(root, "alpha"))) + format_scores(
        "beta", compute_scores(treasure_file(root, "beta"))
    )
    assert calculate_scores(root) == expected


def test_calculate_scores_skips_dirs_without_file(root):
    (root / "empty").mkdir()
    assert "empty" not in calculate_scores(root)


def test_monitor_queries(root):
    with Monitor(root) as monitor:
        assert monitor.list_hunts() == hunt_summary(root)
        listing = monitor.list_treasures("alpha")
        assert listing.count("Treasure ID:") == 3
        assert "Name: bob\nValue: 5\n" in listing
        details = monitor.view_treasure("alpha", "t2")
        assert "User: bob" in details
        assert "Clue: rock" in details
        assert monitor.view_treasure("alpha", "zz") == "treasure not found\n"


def test_monitor_empty_hunt(root):
    (root / "gamma").mkdir()
    treasure_file(root, "gamma").write_bytes(b"")
    with Monitor(root) as monitor:
        assert monitor.list_treasures("gamma") == "No treasures\n"


def test_monitor_missing_hunt_raises(root):
    with Monitor(root) as monitor:
        with pytest.raises(MonitorError):
            monitor.list_treasures("nothing")
        assert monitor.list_hunts() == hunt_summary(root)


def test_monitor_lifecycle(root):
    monitor = Monitor(root)
    with pytest.raises(MonitorError):
        monitor.list_hunts()
    monitor.start()
    with pytest.raises(MonitorError):
        monitor.start()
    assert monitor.stop() == 0
    assert monitor.running is False
    with pytest.raises(MonitorError):
        monitor.stop()


def test_main_without_monitor(root, monkeypatch, capsys):
    monkeypatch.chdir(root)
    monkeypatch.setattr("sys.stdin", io.StringIO("list_hunts\nbogus\nexit\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Monitor is not running" in out
    assert "Unknown command." in out


def test_main_session(root, monkeypatch, capsys):
    monkeypatch.chdir(root)
    script = "start_monitor\nlist_treasure\nbeta\nexit\nstop_monitor\nexit\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(script))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Treasure ID: b1" in out
    assert "Monitor still running. Use stop_monitor first." in out
    assert "stopped with status 0" in out


def test_main_calculate_score(root, monkeypatch, capsys):
    monkeypatch.chdir(root)
    monkeypatch.setattr("sys.stdin", io.StringIO("calculate_score\nexit\n"))
    main([])
    assert calculate_scores(root) in capsys.readouterr().out