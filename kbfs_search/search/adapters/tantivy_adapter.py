"""Tantivy 전문 검색 어댑터"""

import json
import logging
import posixpath

import tantivy

from ...core.models import DocId, IndexedDocument, IndexMapping, SearchHit, StorageBindings
from ..ports.index_engine_port import IndexEnginePort, IndexHandlePort

logger = logging.getLogger(__name__)

# 쿼리 문자열에 필드 한정자가 없을 때 검색하는 필드
DEFAULT_SEARCH_FIELDS = ["tokenized_name", "name"]

# 인덱스 디렉토리에 함께 저장되는 매핑 (재오픈 시 검색 필드 복원)
MAPPING_FILE = "kbfs_mapping.json"


def build_schema(mapping: IndexMapping) -> tantivy.Schema:
    """
    문서 스키마 생성

    - doc_id: raw (교체/조회용 정확 매칭)
    - name, tokenized_name: 기본 분석기 (소문자화 + 토큰 분리)
    - kind: raw ("file" | "dir", 예: kind:dir)
    """
    schema_builder = tantivy.SchemaBuilder()
    schema_builder.add_text_field("doc_id", stored=True, tokenizer_name="raw")
    schema_builder.add_text_field("name", stored=True, tokenizer_name=mapping.tokenizer)
    schema_builder.add_text_field("tokenized_name", stored=True, tokenizer_name=mapping.tokenizer)
    schema_builder.add_text_field("kind", stored=True, tokenizer_name="raw")
    return schema_builder.build()


class TantivyIndex(IndexHandlePort):
    """열린 Tantivy 인덱스"""

    def __init__(
        self,
        index: tantivy.Index,
        search_fields: list[str] | None = None,
        writer_heap_size: int = 50_000_000,
    ):
        self._index = index
        self._schema = index.schema
        self.search_fields = search_fields if search_fields else DEFAULT_SEARCH_FIELDS
        self.writer_heap_size = writer_heap_size
        self._writer = None

    def _get_writer(self):
        """Writer lazy 생성 (인덱스당 writer는 하나만 존재 가능, 단일 스레드)"""
        if self._writer is None:
            self._writer = self._index.writer(heap_size=self.writer_heap_size, num_threads=1)
        return self._writer

    def index(self, doc_id: DocId, document: IndexedDocument) -> None:
        writer = self._get_writer()

        # 같은 ID 문서 교체: 먼저 삭제 후 추가 (같은 배치 내 이전 추가분도 삭제됨)
        writer.delete_documents_by_query(tantivy.Query.term_query(self._schema, "doc_id", doc_id))

        tantivy_doc = tantivy.Document()
        tantivy_doc.add_text("doc_id", doc_id)
        for field_name, value in document.to_fields().items():
            tantivy_doc.add_text(field_name, value)
        writer.add_document(tantivy_doc)

    def commit(self) -> None:
        if self._writer is None:
            return

        self._writer.commit()
        self._index.reload()
        logger.debug("Committed documents to Tantivy index")

    def search(self, query: str, limit: int) -> list[SearchHit]:
        # 문법 오류는 ValueError로 그대로 전파
        parsed = self._index.parse_query(query, self.search_fields)

        self._index.reload()
        searcher = self._index.searcher()

        hits = []
        for score, address in searcher.search(parsed, limit).hits:
            doc = searcher.doc(address)
            hits.append(
                SearchHit(
                    doc_id=doc.get_first("doc_id"),
                    score=score,
                    kind=doc.get_first("kind"),
                )
            )
        return hits

    def doc_count(self) -> int:
        self._index.reload()
        return self._index.searcher().num_docs

    def close(self) -> None:
        if self._writer is None:
            return

        self._writer.commit()
        self._writer.wait_merging_threads()
        self._writer = None
        logger.debug("Closed Tantivy index writer")


class TantivyEngine(IndexEnginePort):
    """
    Tantivy 인덱스 생성/오픈

    Tantivy는 세그먼트 append 방식으로 쓰기 부하에 유리하다.
    Tantivy 디렉토리는 실제 OS 경로만 지원하므로 bindings.os_path로 위치를 얻고,
    디렉토리 생성은 bindings.mkdir_all에 맡긴다.
    검색 필드는 bindings.open_file로 인덱스 디렉토리에 함께 저장한다.
    """

    def __init__(self, writer_heap_size: int = 50_000_000):
        self.writer_heap_size = writer_heap_size

    def _load_search_fields(self, path: str, bindings: StorageBindings) -> list[str]:
        """생성 시 저장한 검색 필드 (매핑 파일 없는 인덱스는 기본값)"""
        try:
            with bindings.open_file(posixpath.join(path, MAPPING_FILE), "r") as f:
                return json.load(f)["search_fields"]
        except FileNotFoundError:
            logger.debug(f"No mapping file in {path}, using default search fields")
            return DEFAULT_SEARCH_FIELDS

    def create_index(
        self,
        path: str,
        mapping: IndexMapping,
        bindings: StorageBindings,
    ) -> TantivyIndex:
        bindings.mkdir_all(path)
        native_path = bindings.os_path(path)

        index = tantivy.Index(build_schema(mapping), path=native_path, reuse=False)
        with bindings.open_file(posixpath.join(path, MAPPING_FILE), "w") as f:
            json.dump({"search_fields": mapping.search_fields}, f)
        logger.info(f"Created Tantivy index at {native_path}")

        return TantivyIndex(
            index,
            search_fields=mapping.search_fields,
            writer_heap_size=self.writer_heap_size,
        )

    def open_index(self, path: str, bindings: StorageBindings) -> TantivyIndex:
        native_path = bindings.os_path(path)

        index = tantivy.Index.open(native_path)
        logger.info(f"Opened Tantivy index at {native_path}")

        return TantivyIndex(
            index,
            search_fields=self._load_search_fields(path, bindings),
            writer_heap_size=self.writer_heap_size,
        )
