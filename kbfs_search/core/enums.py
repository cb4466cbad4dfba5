"""프로젝트 전역 Enum 및 상수 정의"""

from enum import Enum


class EntryKind(str, Enum):
    """인덱싱 대상 엔트리 타입"""

    FILE = "file"
    DIR = "dir"


class IndexBackend(str, Enum):
    """전문 검색 엔진 백엔드 선택"""

    TANTIVY = "tantivy"
    MEILISEARCH = "meilisearch"
