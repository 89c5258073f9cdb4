import gzip

import pytest

from microws.file_server import FileStore, load_file_content


@pytest.fixture
def site(tmp_path):
    (tmp_path / "index.html").write_bytes(b"<h1>" + b"hello " * 200 + b"</h1>")
    (tmp_path / "tiny.txt").write_bytes(b"x")
    (tmp_path / ".hidden").write_bytes(b"secret stuff")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "page.txt").write_bytes(b"page " * 100)
    return tmp_path


def test_compressible_content_is_gzipped(tmp_path):
    path = tmp_path / "a.txt"
    original = b"a" * 1000
    path.write_bytes(original)
    content, compressed = load_file_content(path)
    assert compressed is True
    assert len(content) < len(original)
    assert gzip.decompress(content) == original


def test_incompressible_content_is_kept_raw(tmp_path):
    path = tmp_path / "b.txt"
    path.write_bytes(b"x")
    assert load_file_content(path) == (b"x", False)


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_file_content(tmp_path / "nope.txt")


def test_load_maps_relative_paths(site):
    store = FileStore(site)
    assert len(store) == 3
    assert "/index.html" in store
    assert "/sub/page.txt" in store
    assert "/.hidden" not in store


def test_lookup_round_trip(site):
    store = FileStore(site)
    content, compressed = store.lookup("/sub/page.txt")
    assert compressed
    assert gzip.decompress(content) == b"page " * 100
    assert store.lookup("/tiny.txt") == (b"x", False)
    assert store.lookup("/missing") is None


def test_respond_root_serves_index(site):
    store = FileStore(site)
    status, headers, body = store.respond("/")
    assert status == "200 OK"
    assert headers == [("Content-Encoding", "gzip")]
    assert gzip.decompress(body).startswith(b"<h1>hello")
    assert store.respond("/index.html") == (status, headers, body)


def test_respond_uncompressed_has_no_encoding(site):
    store = FileStore(site)
    assert store.respond("/tiny.txt") == ("200 OK", [], b"x")


def test_respond_not_found(site):
    store = FileStore(site)
    assert store.respond("/nothing.html") == ("404 Not Found", [], b"Not Found")


def test_loaded_bytes_counts_stored_sizes(site):
    store = FileStore(site)
    expected = sum(len(store.lookup(url)[0]) for url in ("/", "/tiny.txt", "/sub/page.txt") if url != "/")
    expected += len(store.lookup("/index.html")[0])
    assert store.loaded_bytes == expected


def test_reload_replaces_files(site):
    store = FileStore(site)
    (site / "tiny.txt").unlink()
    (site / "new.txt").write_bytes(b"y")
    assert store.load(site) == 3
    assert "/tiny.txt" not in store
    assert store.lookup("/new.txt") == (b"y", False)


def test_load_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileStore(tmp_path / "absent")