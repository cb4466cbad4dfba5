"""Tantivy 어댑터 통합 테스트 (실제 인덱스, tmp_path)"""

import pytest

from kbfs_search.core.models import IndexMapping, StorageBindings
from kbfs_search.fs.local_fs import LocalFileSystem
from kbfs_search.indexer.tree_indexer import TreeIndexer
from kbfs_search.search.adapters.tantivy_adapter import TantivyEngine, TantivyIndex
from kbfs_search.search.index_store import IndexStore
from kbfs_search.search.query_service import QueryService


@pytest.fixture
def storage(tmp_path):
    """인덱스 스토리지 루트"""
    root = tmp_path / "storage"
    root.mkdir()
    return LocalFileSystem(root)


@pytest.fixture
def store():
    return IndexStore(TantivyEngine(writer_heap_size=20_000_000))


@pytest.fixture
def index(store, storage):
    handle = store.open_or_create(store.prepare_substrate(storage))
    yield handle
    handle.close()


def test_creates_index_on_disk(index, storage):
    """kbfs_index/kbindex 아래 생성"""
    assert isinstance(index, TantivyIndex)
    assert (storage.base_path / "kbfs_index" / "kbindex").is_dir()
    assert index.doc_count() == 0


def test_search_round_trip(index, disk_tree):
    """Report_2024.pdf 인덱싱 후 'report' 검색"""
    TreeIndexer(index).index_tree(LocalFileSystem(disk_tree, logical_root="root"))

    paths = QueryService(index).search("report")

    assert "root/Report_2024.pdf" in paths


def test_search_tokenized_parts(index, disk_tree):
    TreeIndexer(index).index_tree(LocalFileSystem(disk_tree))
    service = QueryService(index)

    assert service.search("budget") == ["projects/archive/old_budget.xlsx"]
    assert "projects/kb-search-design.md" in service.search("design")


def test_search_no_match_is_empty(index, disk_tree):
    TreeIndexer(index).index_tree(LocalFileSystem(disk_tree))

    assert QueryService(index).search("zzzznotthere") == []


def test_ignored_entries_absent(index, disk_tree):
    TreeIndexer(index).index_tree(LocalFileSystem(disk_tree))
    service = QueryService(index, default_limit=100)

    assert service.search("deleted") == []
    assert all("Trashes" not in p for p in service.search("report"))
    assert index.doc_count() == 6


def test_reindex_overwrites(index, disk_tree):
    """재인덱싱 시 문서 수 불변"""
    indexer = TreeIndexer(index)
    fs = LocalFileSystem(disk_tree)

    indexer.index_tree(fs)
    first = index.doc_count()
    indexer.index_tree(fs)

    assert index.doc_count() == first
    assert QueryService(index).search("notes") == ["notes.txt"]


def test_kind_field_query(index, disk_tree):
    TreeIndexer(index).index_tree(LocalFileSystem(disk_tree))
    service = QueryService(index, default_limit=100)

    assert sorted(service.search("kind:dir")) == ["projects", "projects/archive"]

    hits = service.search_hits("report")
    assert hits[0].kind == "file"


def test_malformed_query_raises(index):
    """존재하지 않는 필드 등 쿼리 오류는 그대로 전파"""
    with pytest.raises(ValueError):
        QueryService(index).search("nosuchfield:abc")


def test_reopen_existing_index(store, storage, disk_tree):
    """두 번째 open_or_create는 기존 인덱스를 연다"""
    substrate = store.prepare_substrate(storage)
    first = store.open_or_create(substrate)
    TreeIndexer(first).index_tree(LocalFileSystem(disk_tree))
    count = first.doc_count()
    first.close()

    second = store.open_or_create(store.prepare_substrate(storage))
    try:
        assert second.doc_count() == count
        assert "Report_2024.pdf" in QueryService(second).search("report")
    finally:
        second.close()


def test_reopen_keeps_custom_search_fields(storage, disk_tree):
    """생성 시 지정한 검색 필드는 재오픈 후에도 유지"""
    engine = TantivyEngine(writer_heap_size=20_000_000)
    bindings = StorageBindings(
        open_file=storage.open_file,
        mkdir_all=storage.mkdir_all,
        os_path=storage.os_path,
    )

    first = engine.create_index("kbindex", IndexMapping(search_fields=["name"]), bindings)
    TreeIndexer(first).index_tree(LocalFileSystem(disk_tree))
    first.close()

    second = engine.open_index("kbindex", bindings)
    try:
        assert second.search_fields == ["name"]
        assert "Report_2024.pdf" in QueryService(second).search("report")
    finally:
        second.close()


def test_open_without_mapping_file_uses_defaults(store, storage):
    substrate = store.prepare_substrate(storage)
    first = store.open_or_create(substrate)
    first.close()
    (storage.base_path / "kbfs_index" / "kbindex" / "kbfs_mapping.json").unlink()

    second = store.open_or_create(store.prepare_substrate(storage))
    try:
        assert second.search_fields == ["tokenized_name", "name"]
    finally:
        second.close()
