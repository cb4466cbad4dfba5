"""의존성 주입 및 포트 초기화"""

import logging
from pathlib import Path
from typing import Any

from ..search.ports.index_engine_port import IndexEnginePort, IndexHandlePort
from .config import Config
from .enums import IndexBackend

logger = logging.getLogger(__name__)


class Bootstrap:
    """포트 인스턴스 생성 및 의존성 주입"""

    def __init__(self, config: Config):
        self.config = config

        # 인스턴스 캐시 (lazy loading)
        self._storage_fs: Any = None
        self._index_engine: Any = None
        self._index_store: Any = None
        self._index: Any = None
        self._tree_indexer: Any = None
        self._query_service: Any = None

    @property
    def storage_fs(self):
        """인덱스 스토리지 루트 (없으면 생성)"""
        if self._storage_fs is None:
            from ..fs.local_fs import LocalFileSystem

            root = Path(self.config.storage_root).expanduser()
            root.mkdir(parents=True, exist_ok=True)
            self._storage_fs = LocalFileSystem(root)
        return self._storage_fs

    @property
    def index_engine(self) -> IndexEnginePort:
        """전문 검색 엔진 (INDEX_BACKEND에 따라 선택)"""
        if self._index_engine is None:
            backend = self.config.index_backend

            if backend == IndexBackend.TANTIVY:
                from ..search.adapters.tantivy_adapter import TantivyEngine

                self._index_engine = TantivyEngine(
                    writer_heap_size=self.config.tantivy_writer_heap_size,
                )
            elif backend == IndexBackend.MEILISEARCH:
                from meilisearch import Client

                from ..search.adapters.meili_adapter import MeiliSearchEngine

                client = Client(
                    self.config.meilisearch_url,
                    api_key=self.config.meilisearch_master_key,
                )
                self._index_engine = MeiliSearchEngine(
                    client,
                    index_prefix=self.config.meilisearch_index_prefix,
                    batch_size=self.config.meilisearch_batch_size,
                )
            else:
                raise ValueError(f"Unknown index backend: {backend}")
        return self._index_engine  # type: ignore[no-any-return]

    @property
    def index_store(self):
        """인덱스 스토어 어댑터"""
        if self._index_store is None:
            from ..search.index_store import IndexStore

            self._index_store = IndexStore(self.index_engine)
        return self._index_store

    @property
    def index(self) -> IndexHandlePort:
        """열린 인덱스 핸들 (kbfs_index/kbindex)"""
        if self._index is None:
            substrate = self.index_store.prepare_substrate(self.storage_fs)
            self._index = self.index_store.open_or_create(substrate)
        return self._index  # type: ignore[no-any-return]

    @property
    def tree_indexer(self):
        """트리 인덱서"""
        if self._tree_indexer is None:
            from ..indexer.tree_indexer import TreeIndexer

            self._tree_indexer = TreeIndexer(self.index)
        return self._tree_indexer

    @property
    def query_service(self):
        """쿼리 서비스"""
        if self._query_service is None:
            from ..search.query_service import QueryService

            self._query_service = QueryService(
                self.index,
                default_limit=self.config.search_limit,
            )
        return self._query_service

    def close(self) -> None:
        """열린 인덱스 정리"""
        if self._index is not None:
            self._index.close()
            self._index = None
            self._tree_indexer = None
            self._query_service = None


def create_bootstrap(config: Config | None = None) -> Bootstrap:
    """
    Bootstrap 인스턴스 생성

    Args:
        config: 애플리케이션 설정 (None이면 환경변수에서 로드)

    Returns:
        Bootstrap 인스턴스

    Usage:
        >>> bootstrap = create_bootstrap()
        >>> bootstrap.tree_indexer.index_tree(LocalFileSystem("/path/to/tree"))
        >>> bootstrap.query_service.search("report")
    """
    if config is None:
        config = Config.from_env()
    return Bootstrap(config)
