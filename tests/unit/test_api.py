"""
Unit tests for the FastAPI service

The lifespan hook loads the rule table, so clients are created with
`with TestClient(app)` to run startup/shutdown.
"""

import pytest
from fastapi.testclient import TestClient

from src import main
from src.rslp import RuleFormatError


@pytest.fixture
def client(monkeypatch, rules_path):
    monkeypatch.setenv("RSLP_RULES_PATH", str(rules_path))
    monkeypatch.setenv("RSLP_REMOVE_ACCENTS", "true")
    with TestClient(main.app) as test_client:
        yield test_client


class TestStemEndpoint:
    """Test POST /stem"""

    def test_stems_each_word(self, client):
        response = client.post("/stem", json={"text": "casas caminhando livrinho"})

        assert response.status_code == 200
        assert response.json() == {
            "original": "casas caminhando livrinho",
            "stemmed": "cas caminh livr",
        }

    def test_single_spaces_preserved(self, client):
        """Split on single spaces: empty tokens stay empty"""
        response = client.post("/stem", json={"text": "casas  livros"})

        assert response.json()["stemmed"] == "cas  livr"

    def test_punctuation_and_case(self, client):
        response = client.post("/stem", json={"text": "LIVROS, Casas!"})

        assert response.json()["stemmed"] == "livr cas"

    def test_empty_text_rejected(self, client):
        response = client.post("/stem", json={"text": ""})
        assert response.status_code == 422

    def test_missing_text_rejected(self, client):
        response = client.post("/stem", json={})
        assert response.status_code == 422

    def test_non_string_text_rejected(self, client):
        response = client.post("/stem", json={"text": 123})
        assert response.status_code == 422


class TestServiceEndpoints:
    """Test GET / and GET /health"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "RSLP Stemmer API"

    def test_health(self, client):
        response = client.get("/health")
        data = response.json()

        assert response.status_code == 200
        assert data["status"] == "ok"
        assert data["stages"] == 7
        assert data["uptime_seconds"] >= 0


class TestStartup:
    """Test that a bad rule table prevents the service from starting"""

    def test_malformed_rules_abort_startup(self, monkeypatch, tmp_path):
        bad_rules = tmp_path / "bad.rslp"
        bad_rules.write_text('{ "Plural", 3, 0, {"s"},\n{"s",two}};\n', encoding="utf-8")
        monkeypatch.setenv("RSLP_RULES_PATH", str(bad_rules))

        with pytest.raises(RuleFormatError) as exc_info:
            with TestClient(main.app):
                pass

        assert '{"s",two}};' in str(exc_info.value)

    def test_missing_rules_abort_startup(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RSLP_RULES_PATH", str(tmp_path / "missing.rslp"))

        with pytest.raises(FileNotFoundError):
            with TestClient(main.app):
                pass

    def test_accent_setting(self, monkeypatch, rules_path):
        monkeypatch.setenv("RSLP_RULES_PATH", str(rules_path))
        monkeypatch.setenv("RSLP_REMOVE_ACCENTS", "false")

        with TestClient(main.app) as client:
            response = client.post("/stem", json={"text": "coração"})

        assert response.json()["stemmed"] == "coração"
