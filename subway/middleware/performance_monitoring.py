# 성능 모니터링 미들웨어

import time
import logging
import json
from threading import Lock
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match
from starlette.types import ASGIApp

from subway.core.config import settings

logger = logging.getLogger(__name__)


def _route_path(request: Request) -> str:
    # /lines/3 -> /lines/{line_id} 로 묶어서 집계
    # app.routes 에는 include_router prefix 가 붙은 전체 경로가 등록되어 있음
    app = request.scope.get("app")
    for route in getattr(app, "routes", []):
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return request.url.path


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    성능 모니터링 미들웨어

    모든 HTTP 요청의 응답 시간을 측정하여 MetricsCollector에 기록합니다.
    느린 요청(threshold 초과)은 경고로 로깅됩니다.
    """

    def __init__(self, app: ASGIApp, collector: "MetricsCollector" = None):
        super().__init__(app)
        self.slow_threshold_ms = settings.SLOW_REQUEST_THRESHOLD_MS
        self.collector = collector or get_metrics_collector()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_time_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"요청 처리 중 예외 발생: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms, 예외={str(e)}",
                exc_info=True,
            )
            self.collector.record_request(
                path=_route_path(request),
                method=request.method,
                status_code=500,
                elapsed_time_ms=elapsed_time_ms,
            )
            raise

        elapsed_time_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Process-Time-Ms"] = f"{elapsed_time_ms:.2f}"

        is_slow = elapsed_time_ms > self.slow_threshold_ms
        if is_slow:
            logger.warning(
                f"⚠️ 느린 요청 감지: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms (기준: {self.slow_threshold_ms}ms)"
            )

        self.collector.record_request(
            path=_route_path(request),
            method=request.method,
            status_code=response.status_code,
            elapsed_time_ms=elapsed_time_ms,
            is_slow=is_slow,
        )

        logger.debug(
            "PERFORMANCE: "
            + json.dumps(
                {
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "elapsed_time_ms": round(elapsed_time_ms, 2),
                    "slow_request": is_slow,
                },
                ensure_ascii=False,
            )
        )
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    요청/응답 로깅 미들웨어

    4xx는 WARNING, 5xx는 ERROR 레벨로 기록
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger.info(
            f"→ {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        response = await call_next(request)

        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO
        logger.log(
            log_level,
            f"← {request.method} {request.url.path} status={response.status_code}",
        )

        return response


class MetricsCollector:
    """
    메트릭 수집기

    프로세스 메모리에 요청 수, 평균 응답 시간, 에러 수를 경로별로 집계
    """

    def __init__(self):
        self._lock = Lock()
        self.reset()

    def reset(self):
        with self._lock:
            self.request_count = 0
            self.total_elapsed_time_ms = 0.0
            self.slow_request_count = 0
            self.error_count = 0
            self.path_stats = {}

    def record_request(
        self,
        path: str,
        method: str,
        status_code: int,
        elapsed_time_ms: float,
        is_slow: bool = False,
    ):
        is_error = status_code >= 400

        with self._lock:
            self.request_count += 1
            self.total_elapsed_time_ms += elapsed_time_ms
            self.slow_request_count += int(is_slow)
            self.error_count += int(is_error)

            stats = self.path_stats.setdefault(
                f"{method} {path}",
                {"count": 0, "total_time_ms": 0.0, "slow_count": 0, "error_count": 0},
            )
            stats["count"] += 1
            stats["total_time_ms"] += elapsed_time_ms
            stats["slow_count"] += int(is_slow)
            stats["error_count"] += int(is_error)

    def get_summary(self) -> dict:
        """전체 메트릭 요약"""
        with self._lock:
            count = self.request_count
            return {
                "total_requests": count,
                "average_elapsed_time_ms": (
                    round(self.total_elapsed_time_ms / count, 2) if count else 0
                ),
                "slow_requests": self.slow_request_count,
                "error_requests": self.error_count,
                "success_rate": (
                    round((count - self.error_count) / count * 100, 2) if count else 0
                ),
            }

    def get_path_stats(self, top_n: int = 10) -> list:
        """경로별 통계 (요청 수 상위 N개)"""
        with self._lock:
            sorted_paths = sorted(
                self.path_stats.items(), key=lambda x: x[1]["count"], reverse=True
            )
            return [
                {
                    "path": path,
                    "count": stats["count"],
                    "avg_time_ms": round(stats["total_time_ms"] / stats["count"], 2),
                    "slow_count": stats["slow_count"],
                    "error_count": stats["error_count"],
                }
                for path, stats in sorted_paths[:top_n]
            ]


# 전역 메트릭 수집기 인스턴스
_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """메트릭 수집기 인스턴스 반환"""
    return _metrics_collector
