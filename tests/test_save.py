import json

from astral_surveyor.models import save
from astral_surveyor.models.discovery import DiscoveryRecord, DiscoveryStore


def make_record(key="nebula_1_1"):
    return DiscoveryRecord(identity=key, kind="nebula", x=1.0, y=1.0, display_name="NGC 1", timestamp=1.0)


def test_seed_round_trip(tmp_path):
    assert save.load_seed(tmp_path) is None
    assert save.save_seed(42, tmp_path)
    assert save.load_seed(tmp_path) == 42
    assert save.has_save(tmp_path)


def test_file_layout(tmp_path):
    save.save_seed(7, tmp_path)
    data = json.loads((tmp_path / "astral_surveyor_seed.json").read_text())
    assert data == {"version": save.SAVE_VERSION, "value": 7}


def test_malformed_files_read_as_default(tmp_path):
    (tmp_path / "astral_surveyor_seed.json").write_text("{not json")
    (tmp_path / "astral_surveyor_reset_count.json").write_text('{"no_value": 1}')
    (tmp_path / "astral_surveyor_discoveries.json").write_text('{"version": 1, "value": 12}')
    assert save.load_seed(tmp_path) is None
    assert save.load_reset_count(tmp_path) == 0
    assert save.load_discoveries(tmp_path) == ([], [])


def test_wrong_types_are_rejected(tmp_path):
    save.write_value(save.SEED_KEY, "forty-two", tmp_path)
    assert save.load_seed(tmp_path) is None
    save.write_value(save.SEED_KEY, True, tmp_path)
    assert save.load_seed(tmp_path) is None
    save.write_value(save.RESET_COUNT_KEY, -3, tmp_path)
    assert save.load_reset_count(tmp_path) == 0


def test_reset_count_round_trip(tmp_path):
    assert save.load_reset_count(tmp_path) == 0
    save.save_reset_count(4, tmp_path)
    assert save.load_reset_count(tmp_path) == 4


def test_bare_discovery_list(tmp_path):
    save.write_value(save.DISCOVERIES_KEY, [make_record().to_dict(), "junk"], tmp_path)
    records, history = save.load_discoveries(tmp_path)
    assert [r["identity"] for r in records] == ["nebula_1_1"]
    assert history == []


def test_write_failure_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    assert save.save_seed(1, blocker) is False
    assert save.load_seed(blocker) is None


def test_delete_save(tmp_path):
    save.save_seed(1, tmp_path)
    save.save_reset_count(2, tmp_path)
    save.delete_save(tmp_path)
    assert not save.has_save(tmp_path)
    assert save.load_reset_count(tmp_path) == 0
    save.delete_save(tmp_path)  # absent keys are fine


def test_store_autosave_round_trip(tmp_path):
    store = DiscoveryStore.load(tmp_path)
    assert len(store) == 0
    store.put(make_record("nebula_1_1"))
    store.archive()
    store.put(make_record("nebula_2_2"))

    reloaded = DiscoveryStore.load(tmp_path)
    assert [r.identity for r in reloaded.all_records()] == ["nebula_2_2"]
    assert [r.identity for r in reloaded.history] == ["nebula_1_1"]
    assert reloaded.get("nebula_2_2").display_name == "NGC 1"


def test_store_survives_unwritable_directory(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = DiscoveryStore(save_dir=blocker, autosave=True)
    store.put(make_record())
    assert store.has("nebula_1_1")
    assert store.flush() is False


def test_store_skips_malformed_records(tmp_path):
    good = make_record().to_dict()
    save.write_value(save.DISCOVERIES_KEY, {"records": [good, {"kind": "star"}], "history": "nope"}, tmp_path)
    store = DiscoveryStore.load(tmp_path)
    assert [r.identity for r in store.all_records()] == ["nebula_1_1"]
    assert store.history == []


def test_non_list_records_are_ignored(tmp_path):
    save.write_value(save.DISCOVERIES_KEY, {"records": 5, "history": []}, tmp_path)
    assert save.load_discoveries(tmp_path) == ([], [])
    store = DiscoveryStore.load(tmp_path)
    assert store.all_records() == []


def test_non_list_history_is_ignored(tmp_path):
    good = make_record().to_dict()
    save.write_value(save.DISCOVERIES_KEY, {"records": [good], "history": 3.5}, tmp_path)
    store = DiscoveryStore.load(tmp_path)
    assert [r.identity for r in store.all_records()] == ["nebula_1_1"]
    assert store.history == []
