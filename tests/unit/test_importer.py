"""Tests for the legacy file importer."""

import json
from pathlib import Path

import pytest

from translation_client.application.services.importer import (
    Importer,
    find_lang_directories,
    flatten,
    is_translatable_leaf,
    is_valid_key,
    namespace_from_path,
    read_source_file,
)
from translation_client.core.tenant_context import TranslationContext
from translation_client.domain.exceptions import ConfigurationError, MalformedSourceFile


def write_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def importer(gateway, ctx) -> Importer:
    return Importer(gateway, ctx)


class TestFlatten:
    def test_nested_mappings_flattened_with_dots(self) -> None:
        data = {"auth": {"failed": "Bad", "throttle": {"minutes": "Wait"}}}
        assert dict(flatten(data)) == {
            "auth.failed": "Bad",
            "auth.throttle": {"minutes": "Wait"},
        }

    def test_all_string_mapping_kept_whole(self) -> None:
        data = {"a": {"b": "x", "c": {"d": "y"}}}
        assert dict(flatten(data)) == {"a.b": "x", "a.c": {"d": "y"}}

    def test_top_level_all_string_mapping_is_one_value(self) -> None:
        assert dict(flatten({"a": {"b": "x"}})) == {"a": {"b": "x"}}

    def test_empty_mapping_is_a_leaf(self) -> None:
        assert is_translatable_leaf({})
        assert dict(flatten({"a": {}, "b": "x"})) == {"a": {}, "b": "x"}

    def test_lists_are_values(self) -> None:
        assert dict(flatten({"months": ["Jan", "Feb"]})) == {"months": ["Jan", "Feb"]}

    @pytest.mark.parametrize("key", ["", "0", "12", "1.5", " 3 ", "-2", "1e3"])
    def test_empty_and_numeric_keys_skipped(self, key: str) -> None:
        assert not is_valid_key(key)
        assert dict(flatten({key: "x", "ok": "y"})) == {"ok": "y"}

    @pytest.mark.parametrize("key", ["welcome", "v2", "1st", "auth.failed"])
    def test_valid_keys(self, key: str) -> None:
        assert is_valid_key(key)


class TestSourceFiles:
    def test_reads_json(self, tmp_path) -> None:
        path = write_json(tmp_path / "messages.json", {"welcome": "مرحبا"})
        assert read_source_file(path) == {"welcome": "مرحبا"}

    def test_reads_yaml(self, tmp_path) -> None:
        path = tmp_path / "messages.yaml"
        path.write_text("welcome: Hello\nauth:\n  failed: Bad\n", encoding="utf-8")
        assert read_source_file(path) == {"welcome": "Hello", "auth": {"failed": "Bad"}}

    def test_list_file_is_malformed(self, tmp_path) -> None:
        path = write_json(tmp_path / "messages.json", ["a", "b"])
        with pytest.raises(MalformedSourceFile):
            read_source_file(path)

    def test_invalid_json_is_malformed(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MalformedSourceFile) as exc_info:
            read_source_file(path)
        assert exc_info.value.path == str(path)


class TestNamespaceDiscovery:
    def test_namespace_concatenates_segments(self, tmp_path) -> None:
        lang = tmp_path / "Translation" / "Views" / "Lang"
        assert namespace_from_path(lang, tmp_path) == "TranslationViews"

    def test_single_module(self, tmp_path) -> None:
        assert namespace_from_path(tmp_path / "Auth" / "Lang", tmp_path) == "Auth"

    def test_fallback_patterns_find_deeper_lang_dirs(self, tmp_path) -> None:
        (tmp_path / "Translation" / "Views" / "Lang").mkdir(parents=True)
        found = find_lang_directories(tmp_path, "Nope/*/Lang")
        assert found == [tmp_path / "Translation" / "Views" / "Lang"]

    def test_default_pattern(self, tmp_path) -> None:
        (tmp_path / "Auth" / "Lang").mkdir(parents=True)
        (tmp_path / "Billing" / "Lang").mkdir(parents=True)
        assert [p.parent.name for p in find_lang_directories(tmp_path)] == ["Auth", "Billing"]


class TestImportFromFiles:
    def test_pushes_every_group_of_a_locale(self, importer, service, tmp_path) -> None:
        write_json(tmp_path / "en" / "messages.json", {"welcome": "Hi", "auth": {"a": "A"}})
        write_json(tmp_path / "en" / "auth.json", {"failed": "Bad"})

        result = importer.import_from_files("en", tmp_path)

        assert result == {"created": 3, "updated": 0, "total": 3}
        assert service.records[("tenant-1", "en", "messages", "auth", "backend")] == {"a": "A"}
        assert service.records[("tenant-1", "en", "messages", "welcome", "backend")] == "Hi"
        assert service.calls["push"] == 1

    def test_reimport_updates(self, importer, tmp_path) -> None:
        write_json(tmp_path / "en" / "messages.json", {"welcome": "Hi"})
        importer.import_from_files("en", tmp_path)
        assert importer.import_from_files("en", tmp_path)["updated"] == 1

    def test_missing_locale_dir_is_zero(self, importer, service, tmp_path) -> None:
        assert importer.import_from_files("fr", tmp_path) == {
            "created": 0,
            "updated": 0,
            "total": 0,
        }
        assert service.calls["push"] == 0

    def test_malformed_file_skipped(self, importer, service, tmp_path) -> None:
        write_json(tmp_path / "en" / "list.json", ["x"])
        (tmp_path / "en" / "notes.txt").write_text("ignored", encoding="utf-8")
        write_json(tmp_path / "en" / "messages.json", {"welcome": "Hi"})

        assert importer.import_from_files("en", tmp_path)["created"] == 1

    def test_app_prefix_applied_to_groups(self, gateway, service, tmp_path) -> None:
        importer = Importer(gateway, TranslationContext(tenant="t", app_prefix="EDMS"))
        write_json(tmp_path / "en" / "messages.json", {"welcome": "Hi"})
        importer.import_from_files("en", tmp_path)
        assert ("t", "en", "EDMS:messages", "welcome", "backend") in service.records


class TestImportLocales:
    def test_discovers_locales_and_skips_vendor(self, importer, service, tmp_path) -> None:
        write_json(tmp_path / "en" / "messages.json", {"welcome": "Hi"})
        write_json(tmp_path / "ar" / "messages.json", {"welcome": "مرحبا"})
        write_json(tmp_path / "vendor" / "pkg" / "messages.json", {"x": "y"})

        report = importer.import_locales(tmp_path)

        assert [u.name for u in report.units] == ["ar", "en"]
        assert report.ok
        assert report.total_created == 2

    def test_failed_unit_does_not_stop_others(self, importer, service, tmp_path) -> None:
        write_json(tmp_path / "en" / "messages.json", {"welcome": "Hi"})
        write_json(tmp_path / "ar" / "messages.json", {"welcome": "مرحبا"})
        service.push_status = 500

        report = importer.import_locales(tmp_path, ["en", "ar"])

        assert len(report.failures) == 2
        assert service.calls["push"] == 2
        assert not report.ok

    def test_missing_base_path(self, importer, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            importer.import_locales(tmp_path / "missing")

    def test_no_locales(self, importer, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            importer.import_locales(tmp_path)


class TestImportNamespaced:
    def test_groups_pushed_with_namespace(self, importer, service, tmp_path) -> None:
        write_json(
            tmp_path / "Translation" / "Views" / "Lang" / "en" / "messages.json",
            {"title": "Views"},
        )

        report = importer.import_namespaced(tmp_path, "*/Lang")

        assert [u.name for u in report.units] == ["TranslationViews"]
        assert (
            "tenant-1",
            "en",
            "TranslationViews::messages",
            "title",
            "backend",
        ) in service.records

    def test_single_locale_filter(self, importer, service, tmp_path) -> None:
        write_json(tmp_path / "Auth" / "Lang" / "en" / "auth.json", {"failed": "Bad"})
        write_json(tmp_path / "Auth" / "Lang" / "ar" / "auth.json", {"failed": "خطأ"})

        report = importer.import_namespaced(tmp_path, locale="ar")

        assert report.total_created == 1
        assert ("tenant-1", "ar", "Auth::auth", "failed", "backend") in service.records

    def test_no_lang_directories(self, importer, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            importer.import_namespaced(tmp_path)
