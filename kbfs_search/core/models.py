from collections.abc import Callable
from dataclasses import dataclass, field
from typing import IO, Any

from .enums import EntryKind

# 기본 타입 정의
DocId = str  # 인덱스 루트 기준 논리 경로 (예: "root/sub/a_b.md")


# 1) 파일시스템 → 인덱서 사이에서 사용하는 모델
@dataclass
class DirEntry:
    """디렉토리 목록의 한 항목"""

    name: str
    is_dir: bool


# 2) 인덱스 문서
@dataclass
class IndexedDocument:
    """인덱스에 제출되는 파일/디렉토리 문서"""

    name: str
    tokenized_name: str
    kind: EntryKind = EntryKind.FILE

    def to_fields(self) -> dict[str, str]:
        """엔진에 넘길 필드 dict"""
        return {
            "name": self.name,
            "tokenized_name": self.tokenized_name,
            "kind": self.kind.value,
        }


# 3) 인덱스 생성/오픈 설정
@dataclass
class IndexMapping:
    """새 인덱스의 텍스트 분석 설정"""

    tokenizer: str = "default"
    search_fields: list[str] = field(default_factory=lambda: ["tokenized_name", "name"])


@dataclass
class StorageBindings:
    """엔진이 스토리지에 접근하는 유일한 수단"""

    open_file: Callable[..., IO[Any]]
    mkdir_all: Callable[[str], None]
    os_path: Callable[[str], str]


# 4) 검색/인덱싱 결과
@dataclass
class SearchHit:
    doc_id: DocId
    score: float
    kind: str | None = None


@dataclass
class IndexingResult:
    """트리 인덱싱 결과"""

    root: str
    documents: int = 0
    directories: int = 0
    skipped: int = 0
    elapsed_seconds: float = 0.0
