"""인덱스 스토어 어댑터 (인덱스 오픈/생성)"""

import logging

from ..core.models import IndexMapping, StorageBindings
from ..core.ports import StorageSubstratePort
from .ports.index_engine_port import IndexEnginePort, IndexHandlePort

logger = logging.getLogger(__name__)

# 인덱스 저장 위치: <storage_root>/kbfs_index/kbindex
INDEX_DIR = "kbfs_index"
INDEX_NAME = "kbindex"


class IndexStore:
    """
    스토리지 위에 인덱스를 열거나 새로 생성

    엔진은 StorageBindings로 받은 primitive로만 스토리지에 접근한다.
    """

    def __init__(self, engine: IndexEnginePort, mapping: IndexMapping | None = None):
        self.engine = engine
        self.mapping = mapping if mapping else IndexMapping()

    def prepare_substrate(self, fs: StorageSubstratePort) -> StorageSubstratePort:
        """인덱스 전용 디렉토리 생성 후 그 안으로 chroot"""
        fs.mkdir_all(INDEX_DIR)
        return fs.chroot(INDEX_DIR)

    def open_or_create(
        self,
        substrate: StorageSubstratePort,
        path: str = INDEX_NAME,
    ) -> IndexHandlePort:
        """
        인덱스 오픈 (없으면 생성)

        Args:
            substrate: 인덱스 전용 스토리지
            path: substrate 내 인덱스 경로

        Returns:
            인덱스 핸들

        Raises:
            stat/엔진 에러는 그대로 전파 (FileNotFoundError만 생성 분기로 처리)
        """
        bindings = StorageBindings(
            open_file=substrate.open_file,
            mkdir_all=substrate.mkdir_all,
            os_path=substrate.os_path,
        )

        try:
            substrate.stat(path)
        except FileNotFoundError:
            logger.info(f"Creating new index: {path}")
            return self.engine.create_index(path, self.mapping, bindings)

        logger.info(f"Opening existing index: {path}")
        return self.engine.open_index(path, bindings)
