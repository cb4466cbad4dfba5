"""인덱서 모듈"""

from .tokenizer import IGNORED_NAMES, should_ignore, tokenize_name
from .tree_indexer import IndexingCancelledError, TreeIndexer

__all__ = [
    "IGNORED_NAMES",
    "IndexingCancelledError",
    "TreeIndexer",
    "should_ignore",
    "tokenize_name",
]
