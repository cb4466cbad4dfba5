import os
from typing import IO, Any, Protocol

from .models import DirEntry


# 파일시스템 (트리 인덱서용)
class FileSystemPort(Protocol):
    def root(self) -> str:
        """
        이 핸들의 논리 루트 경로
        문서 ID는 root()와 엔트리 이름을 join해서 만든다
        """
        ...

    def join(self, *parts: str) -> str:
        """파일시스템의 경로 구분자 규칙으로 경로 조합"""
        ...

    def read_dir(self, path: str = "") -> list[DirEntry]:
        """
        디렉토리 직계 자식 목록

        Args:
            path: 이 핸들 기준 상대 경로 ("" = 루트)

        Returns:
            DirEntry 리스트 (순서 보장 없음)
        """
        ...

    def chroot(self, name: str) -> "FileSystemPort":
        """자식 디렉토리로 범위를 좁힌 핸들 반환"""
        ...


# 인덱스 스토리지 (Index Store 어댑터용)
class StorageSubstratePort(Protocol):
    def stat(self, path: str) -> os.stat_result:
        """
        경로 상태 조회

        Raises:
            FileNotFoundError: 경로가 없을 때
        """
        ...

    def open_file(self, path: str, mode: str = "r+b") -> IO[Any]:
        ...

    def mkdir_all(self, path: str) -> None:
        """중간 디렉토리 포함 생성 (이미 있으면 무시)"""
        ...

    def os_path(self, path: str) -> str:
        """엔진이 직접 열 수 있는 물리 경로"""
        ...

    def chroot(self, name: str) -> "StorageSubstratePort":
        ...
