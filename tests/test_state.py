import json

from ui import state


def test_round_trip_per_page(tmp_path, monkeypatch):
    file = tmp_path / "state.json"
    monkeypatch.setenv("AUTOLYTIQ_STATE_FILE", str(file))
    state.save_page_state("auto", {"vehicle_price": 42000.0, "credit_tier_id": "fair", "insurance_monthly": None})
    state.save_page_state("gig", {"gross_annual": 50000.0})
    assert state.load_page_state("auto") == {"vehicle_price": 42000.0, "credit_tier_id": "fair", "insurance_monthly": None}
    assert state.load_page_state("gig") == {"gross_annual": 50000.0}
    assert state.load_page_state("housing") == {}
    assert set(json.loads(file.read_text())) == {"auto", "gig"}


def test_unserializable_values_dropped(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTOLYTIQ_STATE_FILE", str(tmp_path / "state.json"))
    state.save_page_state("auto", {"price": 1.0, "widget": object()})
    assert state.load_page_state("auto") == {"price": 1.0}


def test_missing_file_is_empty(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTOLYTIQ_STATE_FILE", str(tmp_path / "absent.json"))
    assert state.load_page_state("auto") == {}


def test_corrupt_file_is_ignored(tmp_path, monkeypatch):
    file = tmp_path / "state.json"
    file.write_text("{broken")
    monkeypatch.setenv("AUTOLYTIQ_STATE_FILE", str(file))
    assert state.load_page_state("auto") == {}
    state.save_page_state("auto", {"price": 2.0})
    assert state.load_page_state("auto") == {"price": 2.0}


def test_default_file_name(monkeypatch):
    monkeypatch.delenv("AUTOLYTIQ_STATE_FILE", raising=False)
    assert state.state_file() == state.STATE_FILE
