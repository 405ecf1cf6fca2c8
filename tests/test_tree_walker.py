from TokenScanner.Business.TreeWalker import TreeWalker, SKIP_DIRS
from TokenScanner.Model.FetchResult import FetchResult


class FakeClient:
    """Serves directory listings from a dict of path -> list of entries."""

    def __init__(self, tree, failing=()):
        self.tree = tree
        self.failing = set(failing)
        self.requested = []

    def get_contents(self, owner, repo, path=""):
        self.requested.append(path)
        if path in self.failing:
            return FetchResult.failure("status 500")
        return FetchResult.success(self.tree.get(path, []))


def f(path, size=10):
    return {"path": path, "type": "file", "size": size, "download_url": f"https://raw/{path}"}


def d(path):
    return {"path": path, "type": "dir", "size": 0, "download_url": None}


def test_walk_collects_nested_files():
    client = FakeClient({
        "": [f("README.md"), d("src")],
        "src": [f("src/main.py"), d("src/pkg")],
        "src/pkg": [f("src/pkg/mod.py")],
    })
    paths = [e.path for e in TreeWalker(client).walk("o", "r")]
    assert paths == ["README.md", "src/main.py", "src/pkg/mod.py"]


def test_walk_skips_excluded_names():
    client = FakeClient({
        "": [d("node_modules"), d("src"), f("build")],
        "src": [d("src/__pycache__"), f("src/app.ts")],
        "node_modules": [f("node_modules/x.js")],
    })
    entries = TreeWalker(client).walk("o", "r")
    assert [e.path for e in entries] == ["src/app.ts"]
    for entry in entries:
        assert not set(entry.path.split("/")) & SKIP_DIRS
    assert "node_modules" not in client.requested


def test_walk_from_excluded_path_returns_nothing():
    client = FakeClient({"vendor": [f("vendor/a.go")]})
    assert TreeWalker(client).walk("o", "r", "vendor") == []
    assert client.requested == []


def test_walk_respects_max_depth():
    tree = {}
    path = ""
    for level in range(8):
        child = f"{path}/d{level}".lstrip("/")
        tree[path] = [f(f"{child}.py".lstrip("/")), d(child)]
        path = child
    client = FakeClient(tree)
    entries = TreeWalker(client).walk("o", "r")
    # listings at depth 0..5 are read, deeper ones are never requested
    assert len(entries) == 6
    assert len(client.requested) == 6


def test_walk_failed_subtree_degrades_to_empty():
    client = FakeClient({
        "": [d("broken"), f("ok.py")],
        "broken": [f("broken/lost.py")],
    }, failing={"broken"})
    assert [e.path for e in TreeWalker(client).walk("o", "r")] == ["ok.py"]


def test_walk_file_cap_overshoots_by_at_most_one_listing():
    client = FakeClient({
        "": [d("a"), d("b"), d("c")],
        "a": [f(f"a/{i}.py") for i in range(8)],
        "b": [f(f"b/{i}.py") for i in range(8)],
        "c": [f(f"c/{i}.py") for i in range(8)],
    })
    entries = TreeWalker(client, max_files=10).walk("o", "r")
    # "a" yields 8, "b" stops once 11 files are seen, "c" is never listed
    assert len(entries) == 11
    assert "c" not in client.requested


def test_walk_seen_counter_is_per_call():
    client = FakeClient({"": [f("a.py"), f("b.py")]})
    walker = TreeWalker(client)
    assert len(walker.walk("o", "r")) == 2
    assert len(walker.walk("o", "r")) == 2
    assert walker.walk("o", "r", seen=1001) == []
