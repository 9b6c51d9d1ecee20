from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "check_connection.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("probe_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class RecordingProbe:
    instances = []

    def __init__(self, conn_factory):
        self.conn_factory = conn_factory
        RecordingProbe.instances.append(self)

    def run(self):
        return False


def test_exits_zero_even_when_probe_fails(script, monkeypatch):
    monkeypatch.setenv("MONGODB_URI", "mongodb://db.invalid:27017/school")
    monkeypatch.setattr(script, "load_dotenv", lambda override=False: None)
    monkeypatch.setattr(script, "configure_logging", lambda: None)
    monkeypatch.setattr(script, "ConnectivityProbe", RecordingProbe)
    RecordingProbe.instances.clear()

    with pytest.raises(SystemExit) as exc:
        script.main()

    assert exc.value.code == 0
    config = RecordingProbe.instances[0].conn_factory.config
    assert config.uri == "mongodb://db.invalid:27017/school"
    assert config.options["tls"] is True


def test_exits_zero_when_probe_raises(script, monkeypatch):
    class ExplodingProbe:
        def __init__(self, conn_factory):
            pass

        def run(self):
            raise RuntimeError("escaped")

    monkeypatch.setattr(script, "load_dotenv", lambda override=False: None)
    monkeypatch.setattr(script, "configure_logging", lambda: None)
    monkeypatch.setattr(script, "ConnectivityProbe", ExplodingProbe)

    with pytest.raises(SystemExit) as exc:
        script.main()

    assert exc.value.code == 0
