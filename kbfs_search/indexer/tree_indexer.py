"""디렉토리 트리 인덱서"""

import logging
import threading
import time
from collections.abc import Iterator

from ..core.models import DirEntry, IndexingResult
from ..core.ports import FileSystemPort
from ..core.telemetry import get_tracer
from ..search.ports.index_engine_port import IndexHandlePort
from .tokenizer import build_document, should_ignore

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class IndexingCancelledError(RuntimeError):
    """cancel_event로 중단된 인덱싱"""


class TreeIndexer:
    """
    파일시스템 트리를 걸으며 모든 엔트리를 인덱스에 제출

    플로우 (엔트리마다):
    1. 제외 규칙 체크 (제외 시 인덱싱/재귀 모두 생략)
    2. 이름 토큰화 → IndexedDocument
    3. 문서 ID = fs.join(fs.root(), name)
    4. 인덱스에 제출 (같은 ID는 교체)
    5. 디렉토리면 chroot 후 바로 하위로 진입 (깊이 우선, 전위 순회)

    재귀 대신 명시적 스택을 사용하므로 트리 깊이가 콜 스택에 묶이지 않는다.
    첫 에러에서 즉시 중단하고 그대로 전파한다. 이미 제출된 문서는 commit된다.
    이때 commit이 실패해도 전파되는 것은 첫 에러다.
    """

    def __init__(self, index: IndexHandlePort):
        """
        Args:
            index: 문서를 제출할 인덱스 핸들
        """
        self.index = index

    def index_tree(
        self,
        root: FileSystemPort,
        cancel_event: threading.Event | None = None,
    ) -> IndexingResult:
        """
        트리 인덱싱

        Args:
            root: 순회 루트 핸들
            cancel_event: 설정되면 다음 엔트리 처리 전에 중단

        Returns:
            IndexingResult

        Raises:
            IndexingCancelledError: cancel_event가 설정된 경우
        """
        start_time = time.time()
        result = IndexingResult(root=root.root())
        logger.info(f"Indexing tree: {root.root() or '/'}")

        with tracer.start_as_current_span("index_tree") as span:
            span.set_attribute("tree.root", result.root)
            try:
                self._walk(root, result, cancel_event)
            except BaseException:
                # 실패해도 이미 제출된 문서는 유지 (롤백 없음)
                # commit 에러가 원래 에러를 덮지 않도록 로그만 남김
                try:
                    self.index.commit()
                except Exception:
                    logger.warning("Commit after failed walk also failed", exc_info=True)
                raise
            self.index.commit()

            result.elapsed_seconds = time.time() - start_time
            span.set_attribute("tree.documents", result.documents)
            span.set_attribute("tree.directories", result.directories)
            span.set_attribute("tree.skipped", result.skipped)

        logger.info(
            f"Indexed {result.documents} entries "
            f"({result.directories} directories, {result.skipped} skipped) "
            f"in {result.elapsed_seconds:.2f}s"
        )
        return result

    def _walk(
        self,
        root: FileSystemPort,
        result: IndexingResult,
        cancel_event: threading.Event | None,
    ) -> None:
        """깊이 우선 순회 (스택 프레임 = 핸들 + 남은 자식 목록)"""
        stack: list[tuple[FileSystemPort, Iterator[DirEntry]]] = [
            (root, iter(root.read_dir("")))
        ]

        while stack:
            fs, children = stack[-1]
            entry = next(children, None)
            if entry is None:
                stack.pop()
                continue

            if cancel_event is not None and cancel_event.is_set():
                raise IndexingCancelledError(
                    f"Indexing cancelled after {result.documents} documents"
                )

            if should_ignore(entry.name):
                logger.debug(f"Ignored: {fs.join(fs.root(), entry.name)}")
                result.skipped += 1
                continue

            doc_id = fs.join(fs.root(), entry.name)
            self.index.index(doc_id, build_document(entry))
            result.documents += 1

            if entry.is_dir:
                result.directories += 1
                child_fs = fs.chroot(entry.name)
                stack.append((child_fs, iter(child_fs.read_dir(""))))
