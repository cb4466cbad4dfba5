"""OpenTelemetry 초기화 및 관리

이 모듈은 OpenTelemetry Trace를 설정합니다.
- OTLP Exporter (Jaeger 등)
- 샘플링 설정

비활성화 상태에서는 opentelemetry API 기본값(NoOp tracer)을 사용한다.
"""

import logging
from typing import Optional

from opentelemetry import trace

logger = logging.getLogger(__name__)


class TelemetryManager:
    """OpenTelemetry 초기화 및 관리"""

    def __init__(
        self,
        service_name: str,
        service_version: str = "0.1.0",
        environment: str = "development",
        enabled: bool = True,
        otlp_endpoint: str = "http://localhost:4317",
        sample_rate: float = 1.0,
    ):
        self.enabled = enabled
        self.service_name = service_name

        if not enabled:
            logger.debug("OpenTelemetry disabled")
            return

        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

        # Resource 생성
        resource = Resource.create(
            {
                SERVICE_NAME: service_name,
                SERVICE_VERSION: service_version,
                "deployment.environment": environment,
            }
        )

        # Trace Provider 설정
        sampler = TraceIdRatioBased(sample_rate)
        trace_provider = TracerProvider(resource=resource, sampler=sampler)

        otlp_trace_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        trace_provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
        trace.set_tracer_provider(trace_provider)

        logger.info(
            f"OpenTelemetry initialized: service={service_name}, "
            f"endpoint={otlp_endpoint}, sample_rate={sample_rate}"
        )

    def get_tracer(self, name: str) -> trace.Tracer:
        """Tracer 가져오기"""
        if not self.enabled:
            return trace.get_tracer(name)

        return trace.get_tracer(name, self.service_name)


# 전역 인스턴스 (Bootstrap에서 초기화)
_telemetry_manager: Optional[TelemetryManager] = None


def init_telemetry(service_name: str, config) -> TelemetryManager:
    """TelemetryManager 초기화

    Args:
        service_name: 서비스 이름 (예: "kbfs-search-cli")
        config: Config 인스턴스

    Returns:
        TelemetryManager 인스턴스
    """
    global _telemetry_manager
    _telemetry_manager = TelemetryManager(
        service_name=service_name,
        enabled=config.otel_enabled,
        otlp_endpoint=config.otel_endpoint,
        sample_rate=config.otel_sample_rate,
        environment=config.environment,
    )
    return _telemetry_manager


def get_tracer(name: str) -> trace.Tracer:
    """편의 함수: Tracer 가져오기

    Args:
        name: 모듈 이름 (보통 __name__)

    Returns:
        Tracer 인스턴스 (OTEL 비활성화 시 NoOp tracer)
    """
    if _telemetry_manager:
        return _telemetry_manager.get_tracer(name)

    return trace.get_tracer(name)
