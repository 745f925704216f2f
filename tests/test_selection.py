from favpanel.models.favorites import EntryKind, FavoriteEntry
from favpanel.models.host import ConsoleHost
from favpanel.models.nodes import CategoryNode, FavoriteNode, ResourceNode
from favpanel.services.selection import SelectionResolver, resolve_paths, resolve_targets


def fav(path, category=None):
    return FavoriteNode(entry=FavoriteEntry(path=path, kind=EntryKind.FILE, category=category))


def res(path):
    return ResourceNode(path=path, is_dir=False)


def test_explicit_multi_select_wins():
    assert resolve_paths(fav("/w/p"), [res("/w/x"), res("/w/y")], [res("/w/q")]) == ["/w/x", "/w/y"]


def test_primary_wins_over_host_selection_when_explicit_is_empty():
    assert resolve_paths(fav("/w/p"), [], [res("/w/q"), res("/w/r")]) == ["/w/p"]


def test_host_selection_is_the_last_tier():
    assert resolve_paths(None, None, [res("/w/q"), res("/w/r")]) == ["/w/q", "/w/r"]


def test_category_nodes_are_filtered_after_resolution():
    assert resolve_paths(CategoryNode(name="Docs"), None, [res("/w/q")]) == []
    assert resolve_paths(None, [CategoryNode(name="Docs"), res("/w/x")], None) == ["/w/x"]


def test_duplicates_removed_by_path_not_identity():
    nodes = [fav("/w/a"), res("/w/a"), res("/w/b"), fav("/w/b", "Docs")]
    targets = resolve_targets(None, nodes, None)
    assert [t.path for t in targets] == ["/w/a", "/w/b"]
    assert targets[0] is nodes[0]


def test_empty_everywhere_is_empty():
    assert resolve_targets(None, None, None) == []
    assert resolve_targets(None, [], []) == []


def test_resolver_reads_live_host_selection():
    host = ConsoleHost()
    resolver = SelectionResolver(host)
    assert resolver.paths() == []
    host.selected = [res("/w/q")]
    assert resolver.paths() == ["/w/q"]
    assert resolver.paths(primary=res("/w/p")) == ["/w/p"]
