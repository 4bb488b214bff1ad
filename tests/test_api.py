"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from cipherlab.core.config import Settings, get_settings
from cipherlab.main import app
from cipherlab.services.engines.registry import EngineRegistry
from cipherlab.services.language.store import LanguageStore, get_language_store

PREFIX = "/api/v1"


@pytest.fixture
def store(english, tmp_path):
    store = LanguageStore(tmp_path)
    store.add(english)
    return store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_language_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


class TestEncryptEndpoint:
    def test_encrypt_with_key(self, client):
        response = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": "Hello, World", "cipher_type": "caesar", "key": 3},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ciphertext"] == "Khoor, Zruog"
        assert data["key_used"] == "3"
        assert data["cipher_type"] == "caesar"

    def test_encrypt_with_random_key(self, client):
        response = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": "attack at dawn", "cipher_type": "vigenere"},
        )
        data = response.json()

        decrypted = client.post(
            f"{PREFIX}/decrypt",
            json={"ciphertext": data["ciphertext"], "cipher_type": "vigenere", "key": data["key_used"]},
        )

        assert decrypted.json()["plaintext"] == "attack at dawn"

    def test_invalid_key(self, client):
        response = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": "hello", "cipher_type": "affine", "key": "13,1"},
        )

        assert response.status_code == 400

    def test_unknown_language(self, client):
        response = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": "hello", "cipher_type": "caesar", "key": 1, "language": "klingon"},
        )

        assert response.status_code == 404

    def test_unregistered_cipher(self, client, monkeypatch):
        monkeypatch.setattr(EngineRegistry, "_engines", {})

        response = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": "hello", "cipher_type": "caesar", "key": 1},
        )

        assert response.status_code == 404


class TestDecryptEndpoint:
    def test_solve_caesar(self, client, short_plaintext):
        encrypted = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": short_plaintext, "cipher_type": "caesar", "key": 7},
        ).json()

        response = client.post(
            f"{PREFIX}/decrypt",
            json={"ciphertext": encrypted["ciphertext"], "cipher_type": "caesar"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["plaintext"] == short_plaintext
        assert data["key_used"] == "7"
        assert data["solved"] is True
        assert data["score"] < 0

    def test_solve_with_options(self, client, plaintext):
        encrypted = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": plaintext, "cipher_type": "vigenere", "key": "LIGHT"},
        ).json()

        response = client.post(
            f"{PREFIX}/decrypt",
            json={
                "ciphertext": encrypted["ciphertext"],
                "cipher_type": "vigenere",
                "options": {"shift_max_key_length": 6},
            },
        )

        assert response.json()["key_used"] == "LIGHT"

    def test_decrypt_with_key(self, client):
        response = client.post(
            f"{PREFIX}/decrypt",
            json={"ciphertext": "WECRLTEERDSOEEFEAOCAIVDEN", "cipher_type": "rail_fence", "key": "3"},
        )

        data = response.json()
        assert data["plaintext"] == "WEAREDISCOVEREDFLEEATONCE"
        assert data["solved"] is False

    def test_unsupported_cipher_type(self, client):
        response = client.post(
            f"{PREFIX}/decrypt",
            json={"ciphertext": "abc", "cipher_type": "enigma"},
        )

        assert response.status_code == 422

    def test_too_long(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(max_ciphertext_length=10)

        response = client.post(
            f"{PREFIX}/decrypt",
            json={"ciphertext": "a" * 11, "cipher_type": "caesar"},
        )

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "cipher_type, options",
        [
            ("vigenere", {"shift_max_key_length": "x"}),
            ("columnar", {"transposition_max_key_length": [4]}),
            ("simple_substitution", {"seed": {"value": 1}}),
        ],
    )
    def test_invalid_option(self, client, short_plaintext, cipher_type, options):
        response = client.post(
            f"{PREFIX}/decrypt",
            json={"ciphertext": short_plaintext, "cipher_type": cipher_type, "options": options},
        )

        assert response.status_code == 400


class TestAnalyzeEndpoint:
    def test_analyze(self, client, plaintext):
        response = client.post(f"{PREFIX}/analyze", json={"text": plaintext, "max_period": 10})

        assert response.status_code == 200
        data = response.json()
        statistics = data["statistics"]
        assert statistics["language"] == "english"
        assert len(statistics["periodic_ioc"]) == 10
        assert statistics["character_frequencies"][0]["character"] == "E"
        assert data["explanations"]

    def test_merged_alphabet(self, client, plaintext):
        response = client.post(f"{PREFIX}/analyze", json={"text": plaintext, "alphabet_len": 25})

        assert response.json()["statistics"]["alphabet_len"] == 25

    def test_unknown_alphabet(self, client, plaintext):
        response = client.post(f"{PREFIX}/analyze", json={"text": plaintext, "alphabet_len": 20})

        assert response.status_code == 400

    def test_too_short(self, client):
        response = client.post(f"{PREFIX}/analyze", json={"text": "ab!"})

        assert response.status_code == 400


class TestLanguagesEndpoint:
    @pytest.fixture
    def abc_language(self):
        return {
            "config": {
                "name": "abc",
                "alphabet_len": 3,
                "alphabets": [{"upper": "ABC", "lower": "abc"}],
            },
            "corpus": "abcabcabba",
        }

    def test_list(self, client):
        response = client.get(f"{PREFIX}/languages")

        assert response.status_code == 200
        data = response.json()
        assert data["default"] == "english"
        english = next(lang for lang in data["languages"] if lang["name"] == "english")
        assert sorted(a["length"] for a in english["alphabets"]) == [25, 26]

    def test_train_and_use(self, client, store, abc_language):
        response = client.post(f"{PREFIX}/languages", json=abc_language)

        assert response.status_code == 201
        assert response.json()["alphabets"][0]["upper"] == "ABC"
        assert (store.directory / "abc.npz").exists()

        encrypted = client.post(
            f"{PREFIX}/encrypt",
            json={"plaintext": "abc", "cipher_type": "caesar", "key": 1, "language": "abc"},
        )
        assert encrypted.json()["ciphertext"] == "bca"

    def test_corpus_too_short(self, client, abc_language):
        abc_language["corpus"] = "ab"

        response = client.post(f"{PREFIX}/languages", json=abc_language)

        assert response.status_code == 400

    def test_malformed_alphabet(self, client, abc_language):
        abc_language["config"]["alphabets"][0]["upper"] = "ABA"

        response = client.post(f"{PREFIX}/languages", json=abc_language)

        assert response.status_code == 400
