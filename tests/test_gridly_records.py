"""Tests for localization entries and the record identity rule."""

from __future__ import annotations

import unittest

import pytest

from gridly_sync.domain.records import (
    LocalizationEntry,
    LocalRecordRef,
    RecordRef,
    RemoteRecordRef,
    composite_record_id,
    local_refs_for,
    strip_namespace,
)


class TestCompositeRecordId(unittest.TestCase):
    def test_combined_id_joins_namespace_and_key(self):
        assert composite_record_id("UI", "Greeting") == "UI,Greeting"

    def test_blueprint_namespace_leaves_comma_marker(self):
        assert composite_record_id("blueprints/ui", "K") == ",K"
        assert composite_record_id("Game/blueprints/hud", "K") == ",K"

    def test_plain_key_when_combined_ids_disabled(self):
        assert composite_record_id("UI", "Greeting", use_combined=False) == "Greeting"

    def test_empty_namespace(self):
        assert composite_record_id("", "K") == ",K"


class TestStripNamespace(unittest.TestCase):
    def test_strips_up_to_first_comma(self):
        assert strip_namespace("UI,Greeting") == "Greeting"

    def test_keeps_later_commas(self):
        assert strip_namespace("UI,a,b") == "a,b"

    def test_leading_comma(self):
        assert strip_namespace(",K") == "K"

    def test_no_comma_is_unchanged(self):
        assert strip_namespace("Greeting") == "Greeting"


class TestDeletionId(unittest.TestCase):
    def test_empty_path_gives_bare_id(self):
        assert RecordRef(id="K", path="").deletion_id() == "K"

    def test_blueprint_path_gives_comma_prefixed_id(self):
        assert RecordRef(id="K", path="blueprints/ui").deletion_id() == ",K"

    def test_normal_path_is_joined(self):
        assert RecordRef(id="K", path="UI").deletion_id() == "UI,K"


def test_local_and_remote_refs_agree_for_blueprint_namespace():
    entry = LocalizationEntry(
        key="K", namespace="blueprints/ui", native_culture="en-US", native_text="Hi"
    )
    uploaded_id = composite_record_id(entry.namespace, entry.key)
    assert uploaded_id == ",K"
    assert uploaded_id.split(",", 1)[0] == ""

    local: LocalRecordRef = RecordRef.from_entry(entry)
    remote: RemoteRecordRef = RecordRef.from_remote(uploaded_id, entry.namespace)

    assert local == remote
    assert local.deletion_id() == remote.deletion_id() == ",K"


def test_remote_ref_is_namespace_stripped():
    ref = RecordRef.from_remote("UI,Greeting", "UI")
    assert ref == RecordRef(id="Greeting", path="UI")


def test_local_refs_for_preserves_order():
    entries = [
        LocalizationEntry(key=k, namespace="UI", native_culture="en-US", native_text=k)
        for k in ("b", "a", "c")
    ]
    assert [ref.id for ref in local_refs_for(entries)] == ["b", "a", "c"]


class TestLocalizationEntry(unittest.TestCase):
    def test_from_dict_defaults(self):
        entry = LocalizationEntry.from_dict({"key": "K", "native_culture": "en-US"})
        assert entry.namespace == ""
        assert entry.native_text == ""
        assert dict(entry.translations) == {}
        assert entry.context is None

    def test_from_dict_full(self):
        entry = LocalizationEntry.from_dict(
            {
                "key": "K",
                "namespace": "UI",
                "native_culture": "en-US",
                "native_text": "Hello",
                "translations": {"fr-FR": "Bonjour"},
                "context": "Menu.uasset - line 3",
                "metadata": {"max_length": 12},
            }
        )
        assert entry.translations["fr-FR"] == "Bonjour"
        assert entry.metadata["max_length"] == "12"

    def test_from_dict_coerces_context_to_text(self):
        entry = LocalizationEntry.from_dict({"key": "K", "native_culture": "en-US", "context": 12})
        assert entry.context == "12"

    def test_mappings_are_read_only(self):
        entry = LocalizationEntry(
            key="K",
            namespace="UI",
            native_culture="en-US",
            native_text="Hello",
            translations={"fr-FR": "Bonjour"},
        )
        with pytest.raises(TypeError):
            entry.translations["de-DE"] = "Hallo"  # type: ignore[index]

    def test_localized_text(self):
        entry = LocalizationEntry(
            key="K",
            namespace="UI",
            native_culture="en-US",
            native_text="Hello",
            translations={"fr-FR": "Bonjour", "de-DE": ""},
        )
        assert entry.localized_text("en-US") == "Hello"
        assert entry.localized_text("fr-FR") == "Bonjour"
        assert entry.localized_text("de-DE") is None
        assert entry.localized_text("ja-JP") is None
