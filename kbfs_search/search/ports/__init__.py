"""검색 도메인 포트 정의"""

from .index_engine_port import IndexEnginePort, IndexHandlePort

__all__ = [
    "IndexEnginePort",
    "IndexHandlePort",
]
