from hotelscout.client.storage import JsonFileStorage, MemoryStorage


def test_memory_storage_roundtrip():
    storage = MemoryStorage()

    storage.set("compare", "[]")
    assert storage.get("compare") == "[]"
    storage.remove("compare")
    storage.remove("compare")
    assert storage.get("compare") is None


def test_json_file_storage_persists_between_instances(tmp_path):
    path = tmp_path / "state" / "storage.json"

    JsonFileStorage(path).set("compare", '["a"]')
    JsonFileStorage(path).set("other", "x")

    reopened = JsonFileStorage(path)
    assert reopened.get("compare") == '["a"]'
    assert reopened.get("other") == "x"

    reopened.remove("compare")
    assert JsonFileStorage(path).get("compare") is None
    assert JsonFileStorage(path).get("other") == "x"


def test_json_file_storage_treats_unreadable_file_as_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("not json", encoding="utf-8")

    storage = JsonFileStorage(path)

    assert storage.get("compare") is None
    storage.set("compare", "[]")
    assert storage.get("compare") == "[]"
