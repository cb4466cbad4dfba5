import hashlib
import logging
from typing import Any

from meilisearch import Client

from ...core.models import DocId, IndexedDocument, IndexMapping, SearchHit, StorageBindings
from ..ports.index_engine_port import IndexEnginePort, IndexHandlePort

logger = logging.getLogger(__name__)


def _task_uid(task: Any) -> int:
    return task.task_uid if hasattr(task, "task_uid") else task.uid


class MeiliSearchIndex(IndexHandlePort):
    """MeiliSearch 인덱스 핸들"""

    def __init__(self, client: Client, index: Any, batch_size: int = 1000):
        self.client = client
        self._index = index
        self.batch_size = batch_size
        self._pending: list[dict[str, str]] = []
        self._last_task: Any = None

    def _sanitize_id(self, doc_id: DocId) -> str:
        """
        문서 ID를 MeiliSearch primary key 형식으로 변환

        MeiliSearch는 ID에 alphanumeric, -, _ 만 허용
        문자 치환은 충돌이 생기므로 (a.b / a_b) 경로 해시를 사용한다
        """
        return hashlib.sha1(doc_id.encode("utf-8")).hexdigest()

    def index(self, doc_id: DocId, document: IndexedDocument) -> None:
        # 같은 primary key는 add_documents가 교체
        self._pending.append(
            {
                "id": self._sanitize_id(doc_id),
                "path": doc_id,  # 원본 ID 보존
                **document.to_fields(),
            }
        )
        if len(self._pending) >= self.batch_size:
            self._flush()

    def _flush(self) -> None:
        if not self._pending:
            return

        # 실패한 배치는 다시 보내지 않음 (재시도 없음)
        batch, self._pending = self._pending, []
        self._last_task = self._index.add_documents(batch)
        logger.debug(f"Submitted {len(batch)} documents")

    def commit(self) -> None:
        self._flush()
        if self._last_task is None:
            return

        # 마지막 작업 완료 대기 (검색 전에 인덱싱이 완료되도록)
        task = self.client.wait_for_task(_task_uid(self._last_task))
        self._last_task = None
        if getattr(task, "status", None) == "failed":
            raise RuntimeError(f"MeiliSearch indexing task failed: {task.error}")

    def search(self, query: str, limit: int) -> list[SearchHit]:
        # 에러는 그대로 전파 (MeilisearchApiError)
        results = self._index.search(
            query,
            {
                "limit": limit,
                "showRankingScore": True,
            },
        )

        return [
            SearchHit(
                doc_id=hit["path"],
                score=hit.get("_rankingScore", 0.0),
                kind=hit.get("kind"),
            )
            for hit in results.get("hits", [])
        ]

    def doc_count(self) -> int:
        return self._index.get_stats().number_of_documents

    def close(self) -> None:
        self.commit()


class MeiliSearchEngine(IndexEnginePort):
    """
    MeiliSearch 백엔드

    인덱스 데이터는 서버가 소유한다. 스토리지에는 인덱스 경로 디렉토리만
    마커로 만들어 다음 실행에서 "이미 있음"으로 판별되게 한다.
    """

    def __init__(
        self,
        client: Client,
        index_prefix: str = "kbfs",
        batch_size: int = 1000,
    ):
        self.client = client
        self.index_prefix = index_prefix
        self.batch_size = batch_size

    def _get_index_name(self, path: str) -> str:
        """논리 경로별 인덱스 이름 생성"""
        # MeiliSearch 인덱스명 제약 (alphanumeric, -, _)
        safe_path = path.replace("/", "_").replace(":", "_").replace(".", "_")
        return f"{self.index_prefix}_{safe_path}"

    def _configure_index(self, index: Any, mapping: IndexMapping) -> None:
        """인덱스 검색 설정"""
        tasks = [
            # 검색 가능한 속성 (우선순위 순서)
            index.update_searchable_attributes(mapping.search_fields),
            # 필터 가능한 속성
            index.update_filterable_attributes(["kind"]),
        ]

        for task in tasks:
            self.client.wait_for_task(_task_uid(task))

        logger.debug(f"Configured index: {index.uid}")

    def create_index(
        self,
        path: str,
        mapping: IndexMapping,
        bindings: StorageBindings,
    ) -> MeiliSearchIndex:
        index_name = self._get_index_name(path)

        bindings.mkdir_all(path)
        logger.info(f"Creating new index: {index_name}")
        task = self.client.create_index(index_name, {"primaryKey": "id"})
        self.client.wait_for_task(_task_uid(task))

        index = self.client.get_index(index_name)
        self._configure_index(index, mapping)
        return MeiliSearchIndex(self.client, index, batch_size=self.batch_size)

    def open_index(self, path: str, bindings: StorageBindings) -> MeiliSearchIndex:
        index_name = self._get_index_name(path)

        # index_not_found 포함 모든 에러 그대로 전파
        index = self.client.get_index(index_name)
        logger.debug(f"Using existing index: {index_name}")
        return MeiliSearchIndex(self.client, index, batch_size=self.batch_size)
