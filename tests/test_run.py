import sys

import pytest

import app.run as run


@pytest.fixture
def fake_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("IMAGES_PATH", "PORT", "RESPONSE_DELAY", "HOST", "KEEPALIVE_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_missing_path_exits_without_serving(fake_uvicorn):
    assert run.main([]) == 1
    assert fake_uvicorn == []


def test_bad_directory_exits(tmp_path, fake_uvicorn):
    assert run.main(["-path", str(tmp_path / "missing")]) == 1
    assert fake_uvicorn == []


def test_bad_delay_exits(image_dir, fake_uvicorn):
    assert run.main(["-path", str(image_dir), "-delay", "soon"]) == 1
    assert fake_uvicorn == []


def test_flags_reach_server(image_dir, fake_uvicorn):
    assert run.main(["-path", str(image_dir), "-port", "8081", "-delay", "0"]) == 0
    (app, kwargs), = fake_uvicorn
    assert kwargs["port"] == 8081
    assert len(app.state.gallery) == 3
    assert app.state.gallery.delay == 0


def test_path_from_environment(image_dir, monkeypatch, fake_uvicorn):
    monkeypatch.setenv("IMAGES_PATH", str(image_dir))
    assert run.main([]) == 0
    (app, kwargs), = fake_uvicorn
    assert kwargs["port"] == 80
    assert app.state.gallery.delay == pytest.approx(0.1)


def test_bind_failure_exit_is_reported(image_dir, monkeypatch, caplog):
    # uvicorn logs the OSError from bind() and calls sys.exit(1)
    def cannot_bind(app, **kwargs):
        sys.exit(1)

    monkeypatch.setattr(run.uvicorn, "run", cannot_bind)
    with caplog.at_level("CRITICAL", logger="gallery"):
        assert run.main(["-path", str(image_dir), "-delay", "0"]) == 1
    assert "Server failed to start" in caplog.text


def test_clean_shutdown_returns_zero(image_dir, monkeypatch):
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: sys.exit(0))
    assert run.main(["-path", str(image_dir), "-delay", "0"]) == 0


@pytest.mark.parametrize("port", ["70000", "-1", "http"])
def test_port_out_of_range_rejected(image_dir, port, fake_uvicorn, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run.main(["-path", str(image_dir), "-port", port])
    assert exc_info.value.code == 2
    assert "-port" in capsys.readouterr().err
    assert fake_uvicorn == []


@pytest.mark.parametrize(
    "name, value",
    [
        ("PORT", "eighty"),
        ("PORT", "70000"),
        ("KEEPALIVE_TIMEOUT", "soon"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_malformed_environment_exits(image_dir, monkeypatch, fake_uvicorn, caplog, name, value):
    monkeypatch.setenv(name, value)
    with caplog.at_level("CRITICAL", logger="gallery"):
        assert run.main(["-path", str(image_dir)]) == 1
    assert name in caplog.text
    assert fake_uvicorn == []


def test_help_says_path_must_exist(capsys):
    with pytest.raises(SystemExit) as exc_info:
        run.main(["-h"])
    assert exc_info.value.code == 0
    assert "must exist" in " ".join(capsys.readouterr().out.split())
