"""파일시스템 협력자 구현"""

from .local_fs import LocalFileSystem

__all__ = ["LocalFileSystem"]
