"""Tests for stale remote record detection."""

from __future__ import annotations

import unittest

from gridly_sync.adapters.gridly.sync.reconcile import Reconciler, compute_deletions
from gridly_sync.domain.records import RecordRef, RemoteRow, local_refs_for
from tests.conftest import make_entry


def _remote(record_id: str, path: str) -> RecordRef:
    return RemoteRow(id=record_id, path=path).to_ref()


class TestReconciler(unittest.TestCase):
    def setUp(self):
        self.local = [
            RecordRef(id="Greeting", path="UI"),
            RecordRef(id="Title", path="blueprints/menu"),
            RecordRef(id="Bare", path=""),
        ]

    def test_untouched_path_is_never_deleted(self):
        remote = [_remote("Other,Anything", "Other"), _remote("Nope", "Elsewhere")]
        assert compute_deletions(remote, self.local) == []

    def test_matching_records_are_kept(self):
        remote = [
            _remote("UI,Greeting", "UI"),
            _remote(",Title", "blueprints/menu"),
            _remote("Bare", ""),
        ]
        assert compute_deletions(remote, self.local) == []

    def test_stale_record_in_normal_path(self):
        assert compute_deletions([_remote("UI,Removed", "UI")], self.local) == ["UI,Removed"]

    def test_stale_record_in_blueprint_path(self):
        remote = [_remote(",OldTitle", "blueprints/menu")]
        assert compute_deletions(remote, self.local) == [",OldTitle"]

    def test_stale_record_with_empty_path(self):
        assert compute_deletions([_remote("Gone", "")], self.local) == ["Gone"]

    def test_output_follows_remote_order(self):
        remote = [
            _remote("UI,z", "UI"),
            _remote("UI,Greeting", "UI"),
            _remote("a", ""),
            _remote("UI,b", "UI"),
        ]
        assert compute_deletions(remote, self.local) == ["UI,z", "a", "UI,b"]

    def test_local_count(self):
        assert Reconciler(self.local).local_count == 3

    def test_stale_records_are_returned_as_parsed(self):
        reconciler = Reconciler(self.local)
        stale = reconciler.stale_records([_remote("UI,Removed", "UI"), _remote("UI,Greeting", "UI")])
        assert stale == [_remote("UI,Removed", "UI")]


def test_moved_key_is_only_pruned_while_old_path_is_exported():
    # "Greeting" moved from Menu to UI; the remote row still sits under Menu.
    remote = [_remote("Menu,Greeting", "Menu"), _remote("UI,Greeting", "UI")]

    only_new_path = local_refs_for([make_entry("Greeting", "UI")])
    assert compute_deletions(remote, only_new_path) == []

    both_paths = local_refs_for([make_entry("Greeting", "UI"), make_entry("Start", "Menu")])
    assert compute_deletions(remote, both_paths) == ["Menu,Greeting"]


def test_key_containing_comma_is_kept():
    remote = [RecordRef.from_remote("UI,a,b", "UI")]
    assert compute_deletions(remote, [RecordRef(id="a,b", path="UI")]) == []


def test_stale_key_containing_comma_keeps_full_key():
    remote = [RecordRef.from_remote("UI,a,b", "UI")]
    assert compute_deletions(remote, [RecordRef(id="c", path="UI")]) == ["UI,a,b"]


def test_remote_refs_are_compared_as_given():
    # Already stripped ids are not stripped again
    reconciler = Reconciler([RecordRef(id="x,y", path="P")])
    assert not reconciler.is_stale(RecordRef(id="x,y", path="P"))
    assert reconciler.is_stale(RecordRef(id="y", path="P"))
