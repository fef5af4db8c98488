import json
import os

from war_dashboard import bootstrap_env
from war_dashboard.bootstrap_env import bridge_secrets_to_env, flatten_secrets, materialize_google_credentials


def test_flatten_secrets():
    flat = dict(flatten_secrets("google", {"sheets": {"api key": "k"}, "zoom": 6}))
    assert flat == {"GOOGLE_SHEETS_API_KEY": "k", "GOOGLE_ZOOM": "6"}


def test_bridge_does_not_override_env(monkeypatch):
    monkeypatch.setenv("SPREADSHEET_ID", "from-env")
    monkeypatch.delenv("SHEET_RANGE", raising=False)
    bridge_secrets_to_env({"SPREADSHEET_ID": "from-secrets", "sheet_range": "Data"})
    assert os.environ["SPREADSHEET_ID"] == "from-env"
    assert os.environ["SHEET_RANGE"] == "Data"
    monkeypatch.delenv("SHEET_RANGE")


def test_materialize_google_credentials(monkeypatch, tmp_path):
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    monkeypatch.setattr(bootstrap_env.tempfile, "gettempdir", lambda: str(tmp_path))
    path = materialize_google_credentials({"GOOGLE_CREDENTIALS_JSON": {"type": "service_account"}})
    assert path == str(tmp_path / bootstrap_env.CREDENTIALS_TMP_NAME)
    assert os.environ["GOOGLE_APPLICATION_CREDENTIALS"] == path
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"type": "service_account"}


def test_materialize_keeps_existing_file(monkeypatch, tmp_path):
    existing = tmp_path / "creds.json"
    existing.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(existing))
    assert materialize_google_credentials({"GOOGLE_CREDENTIALS_JSON": {"type": "x"}}) is None


def test_materialize_skips_invalid_json(monkeypatch):
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    assert materialize_google_credentials({"GOOGLE_CREDENTIALS_JSON": "not json"}) is None
    assert materialize_google_credentials({}) is None
