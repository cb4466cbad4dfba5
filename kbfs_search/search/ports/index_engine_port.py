"""전문 검색 엔진 포트"""

from typing import Protocol

from ...core.models import DocId, IndexedDocument, IndexMapping, SearchHit, StorageBindings


class IndexHandlePort(Protocol):
    """열린 인덱스 핸들"""

    def index(self, doc_id: DocId, document: IndexedDocument) -> None:
        """문서 추가 (같은 ID가 있으면 교체)"""
        ...

    def commit(self) -> None:
        """제출된 문서를 검색 가능 상태로 반영"""
        ...

    def search(self, query: str, limit: int) -> list[SearchHit]:
        """쿼리 문자열 검색 (엔진 문법 그대로 전달)"""
        ...

    def doc_count(self) -> int:
        ...

    def close(self) -> None:
        ...


class IndexEnginePort(Protocol):
    """인덱스 생성/오픈 포트"""

    def create_index(
        self,
        path: str,
        mapping: IndexMapping,
        bindings: StorageBindings,
    ) -> IndexHandlePort:
        """새 인덱스 생성"""
        ...

    def open_index(self, path: str, bindings: StorageBindings) -> IndexHandlePort:
        """기존 인덱스 오픈"""
        ...
