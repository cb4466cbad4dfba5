"""공통 테스트 fixture"""

import posixpath

import pytest

from kbfs_search.core.models import DirEntry, DocId, IndexedDocument, SearchHit


class FakeFileSystem:
    """
    메모리 트리 기반 FileSystemPort

    tree 예시: {"notes.txt": None, "sub": {"a_b.md": None}}
    (dict = 디렉토리, None = 파일)
    """

    def __init__(self, tree: dict, root: str = "", fail_on: set[str] | None = None, log=None):
        self._tree = tree
        self._root = root
        self._fail_on = fail_on or set()
        self.log = log if log is not None else []

    def root(self) -> str:
        return self._root

    def join(self, *parts: str) -> str:
        segments = [p for p in parts if p]
        return posixpath.join(*segments) if segments else ""

    def read_dir(self, path: str = "") -> list[DirEntry]:
        self.log.append(("read_dir", self._root))
        if self._root in self._fail_on:
            raise OSError(f"listing failed: {self._root}")
        return [DirEntry(name=name, is_dir=isinstance(child, dict)) for name, child in self._tree.items()]

    def chroot(self, name: str) -> "FakeFileSystem":
        self.log.append(("chroot", self.join(self._root, name)))
        return FakeFileSystem(
            self._tree[name],
            root=self.join(self._root, name),
            fail_on=self._fail_on,
            log=self.log,
        )


class RecordingIndex:
    """제출된 문서를 기록하는 IndexHandlePort"""

    def __init__(self, fail_on: set[str] | None = None):
        self.docs: dict[DocId, IndexedDocument] = {}
        self.submissions: list[DocId] = []
        self.commits = 0
        self.closed = False
        self.queries: list[tuple[str, int]] = []
        self.results: list[SearchHit] = []
        self._fail_on = fail_on or set()

    def index(self, doc_id: DocId, document: IndexedDocument) -> None:
        if doc_id in self._fail_on:
            raise OSError(f"write failed: {doc_id}")
        self.submissions.append(doc_id)
        self.docs[doc_id] = document

    def commit(self) -> None:
        self.commits += 1

    def search(self, query: str, limit: int) -> list[SearchHit]:
        self.queries.append((query, limit))
        return self.results[:limit]

    def doc_count(self) -> int:
        return len(self.docs)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_index():
    """기록용 인덱스 핸들"""
    return RecordingIndex()


@pytest.fixture
def sample_tree():
    """notes.txt, .DS_Store, sub/a_b.md 트리"""
    return FakeFileSystem(
        {
            "notes.txt": None,
            ".DS_Store": None,
            "sub": {"a_b.md": None},
        },
        root="root",
    )


@pytest.fixture
def disk_tree(tmp_path):
    """디스크 위 테스트 트리"""
    root = tmp_path / "tree"
    root.mkdir()

    (root / "Report_2024.pdf").write_text("pdf")
    (root / "notes.txt").write_text("notes")
    (root / ".DS_Store").write_text("junk")
    (root / "._notes.txt").write_text("resource fork")

    (root / "projects").mkdir()
    (root / "projects" / "kb-search-design.md").write_text("# design")
    (root / "projects" / "archive").mkdir()
    (root / "projects" / "archive" / "old_budget.xlsx").write_text("xlsx")

    # 제외 디렉토리 (하위도 인덱싱되면 안 됨)
    (root / ".Trashes").mkdir()
    (root / ".Trashes" / "deleted_report.pdf").write_text("gone")

    return root
