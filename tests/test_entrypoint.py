import logging

import pytest

from chat_proxy import __main__ as entrypoint


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    yield
    root.handlers[:] = previous_handlers
    root.setLevel(previous_level)


def test_refuses_to_start_without_api_key(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HF_API_KEY")
    started: list[dict] = []
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *args, **kwargs: started.append(kwargs))

    with pytest.raises(SystemExit) as exc:
        entrypoint.main()

    assert exc.value.code == 1
    assert started == []


def test_runs_uvicorn_on_configured_port(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "8123")
    started: list[dict] = []
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, **kwargs: started.append(kwargs))

    entrypoint.main()

    assert started == [{"host": "0.0.0.0", "port": 8123, "log_config": None}]
