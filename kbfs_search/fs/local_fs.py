"""로컬 디스크 파일시스템"""

import logging
import os
import posixpath
from pathlib import Path
from typing import IO, Any

from ..core.models import DirEntry

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """
    로컬 디렉토리를 루트로 하는 파일시스템 핸들

    역할:
    - 트리 인덱서용 목록 조회 / 하위 디렉토리 chroot
    - 인덱스 스토리지용 stat / open / mkdir

    논리 경로는 항상 "/" 구분자를 사용한다 (OS와 무관하게 문서 ID가 동일해야 함).
    """

    SEPARATOR = "/"

    def __init__(self, base_path: str | Path, logical_root: str = ""):
        """
        Args:
            base_path: 실제 디렉토리 경로
            logical_root: 이 핸들의 논리 루트 경로 (문서 ID prefix)
        """
        base = Path(base_path).expanduser().resolve()
        if not base.exists():
            raise FileNotFoundError(f"Path not found: {base}")
        if not base.is_dir():
            raise NotADirectoryError(f"Not a directory: {base}")

        self._base = base
        self._root = logical_root

    def __repr__(self) -> str:
        return f"LocalFileSystem(base={str(self._base)!r}, root={self._root!r})"

    @property
    def base_path(self) -> Path:
        return self._base

    def root(self) -> str:
        return self._root

    def join(self, *parts: str) -> str:
        segments = [p for p in parts if p]
        if not segments:
            return ""
        return posixpath.join(*segments)

    def os_path(self, path: str) -> str:
        """논리 상대 경로 → 물리 경로 (base 밖으로 나가면 에러)"""
        if not path:
            return str(self._base)

        normalized = posixpath.normpath(path.replace(os.sep, self.SEPARATOR))
        if normalized.startswith("/") or normalized == ".." or normalized.startswith("../"):
            raise ValueError(f"Path escapes filesystem root: {path}")
        return str(self._base / normalized)

    def read_dir(self, path: str = "") -> list[DirEntry]:
        entries = []
        with os.scandir(self.os_path(path)) as it:
            for entry in it:
                # 심볼릭 링크 디렉토리는 따라가지 않음 (순환 방지)
                entries.append(DirEntry(name=entry.name, is_dir=entry.is_dir(follow_symlinks=False)))

        return sorted(entries, key=lambda e: e.name)

    def chroot(self, name: str) -> "LocalFileSystem":
        child = Path(self.os_path(name))
        if child.is_symlink():
            raise NotADirectoryError(f"Refusing to chroot into symlink: {child}")

        return LocalFileSystem(child, logical_root=self.join(self._root, name))

    def stat(self, path: str) -> os.stat_result:
        return os.stat(self.os_path(path))

    def open_file(self, path: str, mode: str = "r+b") -> IO[Any]:
        return open(self.os_path(path), mode)

    def mkdir_all(self, path: str, mode: int = 0o700) -> None:
        target = self.os_path(path)
        logger.debug(f"mkdir -p {target}")
        os.makedirs(target, mode=mode, exist_ok=True)
