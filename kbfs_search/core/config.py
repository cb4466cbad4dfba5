from dataclasses import dataclass

from .enums import IndexBackend


@dataclass
class Config:
    """애플리케이션 설정"""

    # 인덱스 스토리지 (kbfs_index/kbindex가 이 아래 생성됨)
    storage_root: str = "~/.kbfs_search"

    # 검색 백엔드 선택
    index_backend: IndexBackend = IndexBackend.TANTIVY

    # Tantivy 설정
    tantivy_writer_heap_size: int = 50_000_000  # writer 메모리 버퍼 (bytes)

    # MeiliSearch 설정
    meilisearch_url: str = "http://localhost:7712"
    meilisearch_master_key: str | None = None
    meilisearch_index_prefix: str = "kbfs"
    meilisearch_batch_size: int = 1000

    # 검색 설정
    search_limit: int = 10  # 기본 반환 개수

    # 로깅
    log_level: str = "INFO"

    # OpenTelemetry 설정
    otel_enabled: bool = False  # OpenTelemetry 활성화
    otel_endpoint: str = "http://localhost:4317"  # OTLP gRPC endpoint
    otel_sample_rate: float = 1.0  # 샘플링 비율 (0.0~1.0)
    otel_service_name: str = "kbfs-search"  # 서비스 이름
    environment: str = "development"  # 환경 (development, staging, production)

    def __post_init__(self):
        """값 검증"""
        if self.search_limit <= 0:
            raise ValueError(f"search_limit must be positive, got {self.search_limit}")
        if not 0.0 <= self.otel_sample_rate <= 1.0:
            raise ValueError(f"otel_sample_rate must be 0.0-1.0, got {self.otel_sample_rate}")

    @classmethod
    def from_env(cls) -> "Config":
        """환경변수에서 설정 로드 (.env 파일 자동 로드)"""
        import os

        from dotenv import load_dotenv

        # .env 파일 로드 (존재하는 경우)
        load_dotenv()

        return cls(
            storage_root=os.getenv("KBFS_STORAGE_ROOT", "~/.kbfs_search"),
            index_backend=IndexBackend(os.getenv("INDEX_BACKEND", IndexBackend.TANTIVY.value)),
            tantivy_writer_heap_size=int(os.getenv("TANTIVY_WRITER_HEAP_SIZE", "50000000")),
            meilisearch_url=os.getenv("MEILISEARCH_URL", "http://localhost:7712"),
            meilisearch_master_key=os.getenv("MEILISEARCH_MASTER_KEY"),
            meilisearch_index_prefix=os.getenv("MEILISEARCH_INDEX_PREFIX", "kbfs"),
            meilisearch_batch_size=int(os.getenv("MEILISEARCH_BATCH_SIZE", "1000")),
            search_limit=int(os.getenv("SEARCH_LIMIT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            otel_enabled=os.getenv("OTEL_ENABLED", "false").lower() == "true",
            otel_endpoint=os.getenv("OTEL_ENDPOINT", "http://localhost:4317"),
            otel_sample_rate=float(os.getenv("OTEL_SAMPLE_RATE", "1.0")),
            otel_service_name=os.getenv("OTEL_SERVICE_NAME", "kbfs-search"),
            environment=os.getenv("ENVIRONMENT", "development"),
        )
