"""엔트리 이름 정규화 및 제외 규칙"""

from ..core.enums import EntryKind
from ..core.models import DirEntry, IndexedDocument

# 인덱싱/재귀 모두에서 제외 (macOS 메타데이터)
IGNORED_NAMES = frozenset({".Trashes", ".fseventsd", ".DS_Store"})
IGNORED_PREFIX = "._"  # AppleDouble 리소스 포크

_SEPARATORS = str.maketrans({"_": " ", "-": " ", ".": " "})


def should_ignore(name: str) -> bool:
    return name in IGNORED_NAMES or name.startswith(IGNORED_PREFIX)


def tokenize_name(name: str) -> str:
    """
    이름의 `_`, `-`, `.`를 모두 공백 하나로 치환

    >>> tokenize_name("My-File_Name.txt")
    'My File Name txt'
    """
    return name.translate(_SEPARATORS)


def build_document(entry: DirEntry) -> IndexedDocument:
    return IndexedDocument(
        name=entry.name,
        tokenized_name=tokenize_name(entry.name),
        kind=EntryKind.DIR if entry.is_dir else EntryKind.FILE,
    )
