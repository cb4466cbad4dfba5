"""검색 엔진 어댑터 구현체"""
