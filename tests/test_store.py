import pytest

from favpanel.models.exceptions import ErrCode, FavPanelError
from favpanel.models.favorites import EntryKind, FavoriteEntry, SortMode
from favpanel.services.favorites_store import FavoritesStore

F, D = EntryKind.FILE, EntryKind.FOLDER


def paths(store):
    return [e.path for e in store.items]


def test_add_appends_and_persists_once(store, recorder):
    assert store.add("/w/a.txt", F)
    assert store.add("/w/b.txt", F, category="Docs")
    assert paths(store) == ["/w/a.txt", "/w/b.txt"]
    assert store.categories == ["Docs"]
    assert recorder.notifications == 2
    assert recorder.persisted == 2
    assert [e.path for e in recorder.snapshots[-1].items] == ["/w/a.txt", "/w/b.txt"]


def test_duplicate_add_is_rejected_without_side_effects(store, recorder):
    store.add("/w/a.txt", F)
    assert not store.add("/w/a.txt", D, category="Docs")
    assert len(store) == 1
    assert store.get("/w/a.txt").kind is F
    assert store.categories == []
    assert recorder.persisted == 1


def test_remove_and_queries(store):
    store.add("/w/a.txt", F)
    store.add("/w/dir", D)
    assert "/w/dir" in store
    assert store.index_of("/w/dir") == 1
    assert store.remove("/w/a.txt")
    assert not store.remove("/w/a.txt")
    assert paths(store) == ["/w/dir"]
    assert store.index_of("/w/a.txt") == -1
    assert store.get("/w/a.txt") is None


def test_queries_return_copies(store):
    store.add("/w/a.txt", F)
    store.items[0].category = "Hacked"
    store.get("/w/a.txt").path = "/elsewhere"
    assert store.get("/w/a.txt").category is None


def test_add_category_is_idempotent(store, recorder):
    assert store.add_category("Docs")
    assert not store.add_category("Docs")
    assert not store.add_category("")
    assert store.categories == ["Docs"]
    assert recorder.persisted == 1


def test_rename_category_rewrites_members_and_list_in_one_step(store, recorder):
    store.add_category("Docs")
    store.add_category("Code")
    store.add("/w/a.txt", F, "Docs")
    store.add("/w/b.txt", F, "Code")
    store.add("/w/c.txt", F, "Docs")
    before_counts = {c: len(store.entries_in(c)) for c in store.categories}
    recorder.snapshots.clear()

    assert store.rename_category("Docs", "Notes")

    assert store.categories == ["Notes", "Code"]
    assert [e.path for e in store.entries_in("Notes")] == ["/w/a.txt", "/w/c.txt"]
    assert len(store.categories) == len(before_counts)
    assert sorted(len(store.entries_in(c)) for c in store.categories) == sorted(before_counts.values())
    # un seul instantané persisté, déjà cohérent
    assert recorder.persisted == 1
    snap = recorder.snapshots[0]
    assert "Docs" not in snap.categories
    assert all(e.category != "Docs" for e in snap.items)


def test_rename_category_onto_existing_merges(store):
    store.add_category("Docs")
    store.add_category("Notes")
    store.add("/w/a.txt", F, "Docs")
    store.add("/w/b.txt", F, "Notes")
    assert store.rename_category("Docs", "Notes")
    assert store.categories == ["Notes"]
    assert [e.path for e in store.entries_in("Notes")] == ["/w/a.txt", "/w/b.txt"]


@pytest.mark.parametrize("old,new", [("Docs", "Docs"), ("Docs", ""), ("Nope", "Other")])
def test_rename_category_noops(store, recorder, old, new):
    store.add_category("Docs")
    assert not store.rename_category(old, new)
    assert store.categories == ["Docs"]
    assert recorder.persisted == 1


def test_delete_category_demotes_members(store):
    store.add("/w/a.txt", F, "Docs")
    store.add("/w/b.txt", F)
    assert store.delete_category("Docs")
    assert store.categories == []
    assert [e.category for e in store.items] == [None, None]
    assert paths(store) == ["/w/a.txt", "/w/b.txt"]
    assert not store.delete_category("Docs")


def test_move_to_category_creates_it_and_move_to_root_clears_it(store):
    store.add("/w/a.txt", F)
    assert store.move_to_category("/w/a.txt", "Fresh")
    assert store.categories == ["Fresh"]
    assert store.get("/w/a.txt").category == "Fresh"
    assert store.move_to_root("/w/a.txt")
    assert store.get("/w/a.txt").category is None
    # la catégorie vide reste dans la liste
    assert store.categories == ["Fresh"]
    assert not store.move_to_category("/w/unknown", "Fresh")
    assert not store.move_to_root("/w/unknown")


def test_relocate_keeps_category_and_position(store):
    store.add("/w/a.txt", F)
    store.add("/w/dir1", D, "Docs")
    store.add("/w/dir1/deep/x.txt", F)
    store.add("/w/dir10", D)
    assert store.relocate("/w/dir1", "/w/dir2/dir1") == 2
    assert paths(store) == ["/w/a.txt", "/w/dir2/dir1", "/w/dir2/dir1/deep/x.txt", "/w/dir10"]
    assert store.get("/w/dir2/dir1").category == "Docs"
    assert store.relocate("/w/nowhere", "/w/else") == 0


def test_relocate_drops_stale_entry_on_target_path(store, recorder):
    store.add("/w/dir2/a.txt", F)
    store.add("/w/a.txt", F, "Docs")
    store.add("/w/dir1", D)
    store.add("/w/dir2/dir1/inner.txt", F)
    store.add("/w/dir1/inner.txt", F, "Docs")
    before = recorder.persisted

    assert store.relocate("/w/a.txt", "/w/dir2/a.txt") == 1
    assert store.relocate("/w/dir1", "/w/dir2/dir1") == 2
    assert paths(store) == ["/w/dir2/a.txt", "/w/dir2/dir1", "/w/dir2/dir1/inner.txt"]
    assert store.get("/w/dir2/dir1/inner.txt").category == "Docs"
    assert store.get("/w/dir2/a.txt").category == "Docs"
    assert recorder.persisted == before + 2


def test_tracked_under(store):
    store.add("/w/dir1/x.txt", F)
    store.add("/w/dir10", D)
    store.add("/w/dir1", D)
    assert store.tracked_under("/w/dir1") == ["/w/dir1/x.txt", "/w/dir1"]
    assert store.tracked_under("/w/dir1/x.txt") == ["/w/dir1/x.txt"]
    assert store.tracked_under("/w/dir2") == []


def test_swap(store):
    store.add("/w/a", F)
    store.add("/w/b", F)
    assert store.swap("/w/a", "/w/b")
    assert paths(store) == ["/w/b", "/w/a"]
    assert not store.swap("/w/a", "/w/a")
    assert not store.swap("/w/a", "/w/zz")


def test_transaction_collapses_notifications(store, recorder):
    with store.transaction():
        store.add("/w/a", F)
        with store.transaction():
            store.add("/w/b", F)
            store.set_sort_mode(SortMode.ASCENDING)
        assert recorder.persisted == 0
    assert recorder.notifications == 1
    assert recorder.persisted == 1
    assert recorder.snapshots[0].sort_mode is SortMode.ASCENDING


def test_transaction_without_change_is_silent(store, recorder):
    with store.transaction():
        store.remove("/w/none")
    assert recorder.notifications == 0
    assert recorder.persisted == 0


def test_load_dedupes_and_appends_orphan_categories(store, recorder):
    store.load(
        [
            FavoriteEntry(path="/w/a", kind=F, category="Orphan"),
            FavoriteEntry(path="/w/a", kind=D),
            FavoriteEntry(path="/w/b", kind=D, category=""),
        ],
        ["Docs", "Docs"],
        SortMode.MODIFIED,
    )
    assert paths(store) == ["/w/a", "/w/b"]
    assert store.get("/w/a").kind is F
    assert store.get("/w/b").category is None
    assert store.categories == ["Docs", "Orphan"]
    assert store.sort_mode is SortMode.MODIFIED
    assert recorder.notifications == 1
    assert recorder.persisted == 0


def test_persistence_failure_does_not_break_mutation():
    def broken(_snapshot):
        raise FavPanelError("disk full", code=ErrCode.SETTINGS)

    calls = []
    store = FavoritesStore(persist=broken)
    store.subscribe(lambda: calls.append(1))
    assert store.add("/w/a", F)
    assert "/w/a" in store
    assert calls == [1]


def test_listener_failure_is_logged_not_raised(store, recorder):
    def boom():
        raise RuntimeError("listener")

    store.subscribe(boom)
    store.add("/w/a", F)
    assert recorder.notifications == 1
    assert recorder.persisted == 1


def test_unsubscribe(store, recorder):
    calls = []
    unsubscribe = store.subscribe(lambda: calls.append(1))
    store.refresh()
    unsubscribe()
    unsubscribe()
    store.refresh()
    assert calls == [1]
    assert recorder.notifications == 2
