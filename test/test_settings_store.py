"""
Tests for option storage and the post type preference
"""

import json

from meta_auditor.schemas.audit import AuditQuery
from meta_auditor.services.settings_store import POST_TYPES_OPTION, JsonFileSettingsStore, PostTypePreference


class TestJsonFileSettingsStore:
    def test_missing_file_returns_default(self, tmp_path):
        store = JsonFileSettingsStore(tmp_path / "options.json")
        assert store.get_option("anything", "fallback") == "fallback"

    def test_update_and_read_back(self, tmp_path):
        store = JsonFileSettingsStore(tmp_path / "nested" / "options.json")
        store.update_option("color", "blue")
        assert store.get_option("color") == "blue"
        assert json.loads((tmp_path / "nested" / "options.json").read_text()) == {"color": "blue"}

    def test_update_keeps_other_options(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"blogname": "Site"}))
        store = JsonFileSettingsStore(path)
        store.update_option(POST_TYPES_OPTION, ["post"])
        assert json.loads(path.read_text()) == {"blogname": "Site", POST_TYPES_OPTION: ["post"]}

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("{not json")
        assert JsonFileSettingsStore(path).get_option("x", 1) == 1

    def test_non_object_file_is_ignored(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("[1, 2]")
        assert JsonFileSettingsStore(path).get_option("x") is None


class TestPostTypePreference:
    def test_default_when_nothing_stored(self, tmp_path):
        preference = PostTypePreference(JsonFileSettingsStore(tmp_path / "o.json"), ["page"])
        assert preference.load() == ["page"]

    def test_save_then_load(self, tmp_path):
        preference = PostTypePreference(JsonFileSettingsStore(tmp_path / "o.json"))
        preference.save(["post", "product"])
        assert preference.load() == ["post", "product"]

    def test_empty_selection_is_kept(self, tmp_path):
        preference = PostTypePreference(JsonFileSettingsStore(tmp_path / "o.json"), ["page"])
        preference.save([])
        assert preference.load() == []

    def test_invalid_stored_value_falls_back(self, tmp_path):
        store = JsonFileSettingsStore(tmp_path / "o.json")
        store.update_option(POST_TYPES_OPTION, "page")
        assert PostTypePreference(store, ["page", "post"]).load() == ["page", "post"]

    def test_resolve_without_selection_uses_stored(self, tmp_path):
        store = JsonFileSettingsStore(tmp_path / "o.json")
        store.update_option(POST_TYPES_OPTION, ["post"])
        assert PostTypePreference(store).resolve(AuditQuery()) == ["post"]

    def test_resolve_with_selection_persists(self, tmp_path):
        store = JsonFileSettingsStore(tmp_path / "o.json")
        preference = PostTypePreference(store)
        query = AuditQuery(post_types=["product"], post_types_supplied=True)
        assert preference.resolve(query) == ["product"]
        assert store.get_option(POST_TYPES_OPTION) == ["product"]
