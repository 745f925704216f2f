import pytest

from favpanel.models.favorites import EntryKind, SortMode
from favpanel.models.nodes import CategoryNode, FavoriteNode, ResourceNode
from favpanel.services.tree import FavoritesTree


@pytest.fixture
def tree(store, workspace):
    store.add(str(workspace / "dir1"), EntryKind.FOLDER)
    store.add(str(workspace / "a.txt"), EntryKind.FILE, "Docs")
    store.add(str(workspace / "gone"), EntryKind.FOLDER)
    store.add_category("Empty")
    return FavoritesTree(store)


def test_root_lists_root_favorites_then_categories(tree, workspace):
    children = tree.get_children()
    assert [type(n) for n in children] == [FavoriteNode, FavoriteNode, CategoryNode, CategoryNode]
    assert [n.label for n in children] == ["dir1", "gone", "Docs", "Empty"]
    assert children[0].missing is False
    assert children[1].missing is True


def test_category_children(tree, workspace):
    docs = tree.get_children(CategoryNode(name="Docs"))
    assert [n.path for n in docs] == [str(workspace / "a.txt")]
    assert tree.get_children(CategoryNode(name="Empty")) == []


def test_folder_favorite_expands_from_disk(tree, workspace):
    dir1 = tree.get_children()[0]
    (workspace / "dir1" / "sub").mkdir()
    children = tree.get_children(dir1)
    assert children == [
        ResourceNode(path=str(workspace / "dir1" / "sub"), is_dir=True),
        ResourceNode(path=str(workspace / "dir1" / "inner.txt"), is_dir=False),
    ]
    assert tree.get_children(children[1]) == []
    assert tree.get_children(children[0]) == []


def test_missing_folder_and_file_favorites_have_no_children(tree):
    root = tree.get_children()
    assert tree.get_children(root[1]) == []
    file_fav = tree.get_children(CategoryNode(name="Docs"))[0]
    assert tree.get_children(file_fav) == []


def test_sort_mode_applies_to_favorites(store, tree, workspace):
    store.add(str(workspace / "b.txt"), EntryKind.FILE)
    store.set_sort_mode(SortMode.DESCENDING)
    assert [n.label for n in tree.get_children()][:3] == ["gone", "dir1", "b.txt"]


def test_category_created_by_move_is_shown(store, workspace):
    store.load([], [], SortMode.MANUAL)
    store.add(str(workspace / "b.txt"), EntryKind.FILE)
    store.move_to_category(str(workspace / "b.txt"), "Adhoc")
    labels = [n.label for n in FavoritesTree(store).get_children()]
    assert labels == ["Adhoc"]


def test_walk_flattens_with_depth(tree, workspace):
    rows = [(depth, node.label) for depth, node in tree.walk(fs_levels=1)]
    assert rows == [
        (0, "dir1"),
        (1, "inner.txt"),
        (0, "gone"),
        (0, "Docs"),
        (1, "a.txt"),
        (0, "Empty"),
    ]
    shallow = [(depth, node.label) for depth, node in tree.walk(fs_levels=0)]
    assert (1, "inner.txt") not in shallow
