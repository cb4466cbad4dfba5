"""쿼리 서비스"""

import logging

from ..core.models import SearchHit
from ..core.telemetry import get_tracer
from .ports.index_engine_port import IndexHandlePort

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class QueryService:
    """
    자유 텍스트 쿼리 → 매칭된 문서 ID(경로) 목록

    쿼리 문법은 엔진 것을 그대로 사용한다 (필드 한정자, 불리언, 와일드카드 등).
    결과 순서는 엔진이 반환한 순서 그대로이며 중복 제거도 하지 않는다.
    """

    def __init__(self, index: IndexHandlePort, default_limit: int = 10):
        self.index = index
        self.default_limit = default_limit

    def search(self, query_string: str, limit: int | None = None) -> list[str]:
        """매칭된 문서 경로 목록 (매칭 없으면 빈 리스트)"""
        return [hit.doc_id for hit in self.search_hits(query_string, limit)]

    def search_hits(self, query_string: str, limit: int | None = None) -> list[SearchHit]:
        """점수/타입을 포함한 검색 결과"""
        k = limit if limit is not None else self.default_limit

        with tracer.start_as_current_span("search") as span:
            span.set_attribute("search.query", query_string)
            span.set_attribute("search.limit", k)

            hits = self.index.search(query_string, k)

            span.set_attribute("search.hits", len(hits))

        logger.debug(f"Found {len(hits)} results for query: {query_string}")
        return hits
