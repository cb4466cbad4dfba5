"""Search 도메인 - 인덱스 스토어, 쿼리 서비스, 엔진 어댑터"""

from .index_store import INDEX_DIR, INDEX_NAME, IndexStore
from .ports import IndexEnginePort, IndexHandlePort
from .query_service import QueryService

__all__ = [
    "INDEX_DIR",
    "INDEX_NAME",
    "IndexEnginePort",
    "IndexHandlePort",
    "IndexStore",
    "QueryService",
]
