from pathlib import Path

from src.petcare.persistence.token_store import FileTokenStore, InMemoryTokenStore


def test_file_token_store_round_trip(tmp_path: Path) -> None:
    store = FileTokenStore(path=tmp_path / "state" / "session.json")

    assert store.load() is None
    store.save("abc")

    assert store.path.read_text(encoding="utf-8") == '{\n  "token": "abc"\n}'
    assert FileTokenStore(path=tmp_path / "state" / "session.json").load() == "abc"


def test_file_token_store_clear_removes_file(tmp_path: Path) -> None:
    store = FileTokenStore(path=tmp_path / "session.json")
    store.save("abc")

    store.save(None)

    assert not store.path.exists()
    assert store.load() is None
    store.save(None)


def test_file_token_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert FileTokenStore(path=path).load() is None

    path.write_bytes(b'{"token": "\xff\xfe"}')

    assert FileTokenStore(path=path).load() is None


def test_file_token_store_defaults_to_settings_path(monkeypatch, tmp_path: Path) -> None:
    from src.petcare.persistence import token_store

    monkeypatch.setattr(token_store.settings, "data_root", tmp_path)

    store = FileTokenStore()

    assert store.path == (tmp_path / "session.json").resolve()


def test_in_memory_store():
    store = InMemoryTokenStore("abc")

    assert store.load() == "abc"
    store.save(None)
    assert store.load() is None
