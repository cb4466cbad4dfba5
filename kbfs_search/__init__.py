"""kbfs-search: 파일 이름 전문 검색 인덱서"""

__version__ = "0.1.0"
