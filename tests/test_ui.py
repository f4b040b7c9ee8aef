from pathlib import Path

from text2speech import ui


def test_select_player_prefers_first_installed(monkeypatch):
    monkeypatch.setattr(ui.shutil, "which", lambda name: name in {"mpv", "play"})
    cmd = ui.select_player_cmd(Path("a.mp3"), platform="linux")
    assert cmd == ["mpv", "--no-video", "--really-quiet", "a.mp3"]


def test_select_player_none_available(monkeypatch):
    monkeypatch.setattr(ui.shutil, "which", lambda name: None)
    assert ui.select_player_cmd(Path("a.mp3"), platform="darwin") is None
    assert ui.select_player_cmd(Path("a.mp3"), platform="win32") is None


def test_play_audio_without_player(monkeypatch, capsys):
    monkeypatch.setattr(ui, "select_player_cmd", lambda path: None)
    assert ui.play_audio_file(Path("a.mp3")) == 1
    assert "No suitable audio player" in capsys.readouterr().err


def test_play_audio_runs_player(monkeypatch):
    calls = []
    monkeypatch.setattr(ui, "select_player_cmd", lambda path: ["afplay", str(path)])
    monkeypatch.setattr(ui.subprocess, "call", lambda cmd, **kw: calls.append(cmd) or 0)
    assert ui.play_audio_file(Path("a.mp3")) == 0
    assert calls == [["afplay", "a.mp3"]]
