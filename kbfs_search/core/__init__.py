"""공통 모델, 설정, 포트"""
