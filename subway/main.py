"""
Subway Admin Backend - FastAPI Application

지하철 역, 노선, 구간 관리 API
노선 조회 시 구간 정보로부터 상행 종점 → 하행 종점 역 순서를 복원
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from subway.core.config import settings
from subway.api.v1.router import api_router

# 성능 모니터링
from subway.middleware.performance_monitoring import (
    PerformanceMonitoringMiddleware,
    RequestLoggingMiddleware,
    get_metrics_collector,
)

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    서버 시작 시 실행:
    - PostgreSQL 연결 풀 초기화
    - 테이블 생성 (없을 경우)

    서버 종료 시 실행:
    - PostgreSQL 연결 풀 종료

    STORAGE_BACKEND=memory 이면 DB 작업 없이 시작
    """
    # ========== Startup ==========
    logger.info(f"{settings.PROJECT_NAME} 시작 중... (storage={settings.STORAGE_BACKEND})")

    if not settings.use_memory_store:
        from subway.db.database import initialize_pool, initialize_schema

        try:
            logger.info("1/2 PostgreSQL 연결 풀 초기화 중...")
            initialize_pool()

            logger.info("2/2 테이블 확인 중...")
            initialize_schema()
        except Exception as e:
            logger.error(f"❌ 초기화 실패: {e}", exc_info=True)
            raise

    logger.info(f"{settings.PROJECT_NAME} 시작 완료!")

    yield

    # ========== Shutdown ==========
    logger.info(f"{settings.PROJECT_NAME} 종료 중...")

    if not settings.use_memory_store:
        from subway.db.database import close_pool

        try:
            close_pool()
        except Exception as e:
            logger.error(f"❌ 종료 중 오류: {e}", exc_info=True)

    logger.info(f"✓ {settings.PROJECT_NAME} 종료 완료")


# FastAPI 애플리케이션 생성
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## 지하철 노선도 관리 API

    ### 주요 기능
    - 🚉 역 생성 / 조회 / 수정 / 삭제
    - 🚇 노선 생성 / 조회 / 수정 / 삭제
    - 🔗 노선에 구간 추가, 노선에서 역 제외
    - 📍 노선 조회 시 상행 종점부터 하행 종점까지 정렬된 역 목록 제공
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 성능 모니터링 미들웨어 추가
if settings.ENABLE_PERFORMANCE_MONITORING:
    app.add_middleware(PerformanceMonitoringMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    logger.info("✓ 성능 모니터링 미들웨어 활성화")

# API 라우터 등록
app.include_router(api_router)


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """
    루트 엔드포인트

    서비스 기본 정보 반환
    """
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "storage": settings.STORAGE_BACKEND,
        "docs": "/docs",
    }


@app.get("/health")
def health_check():
    """
    헬스 체크 엔드포인트

    저장소 연결 상태 확인용 (로드 밸런서, 모니터링)
    """
    if settings.use_memory_store:
        store_status = "healthy"
    else:
        try:
            from subway.db.database import check_connection

            store_status = "healthy" if check_connection() else "unhealthy"
        except Exception as e:
            logger.error(f"DB 헬스 체크 실패: {e}")
            store_status = "unhealthy"

    status_code = 200 if store_status == "healthy" else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "status": store_status,
            "version": settings.VERSION,
            "timestamp": time.time(),
            "components": {"storage": store_status},
        },
    )


@app.get("/metrics")
async def get_metrics():
    """
    성능 메트릭 엔드포인트

    애플리케이션 성능 통계 조회
    """
    if not settings.ENABLE_PERFORMANCE_MONITORING:
        return {"message": "성능 모니터링이 비활성화되어 있습니다"}

    try:
        metrics = get_metrics_collector()

        return {
            "summary": metrics.get_summary(),
            "top_paths": metrics.get_path_stats(top_n=10),
            "configuration": {
                "slow_request_threshold_ms": settings.SLOW_REQUEST_THRESHOLD_MS,
                "monitoring_enabled": settings.ENABLE_PERFORMANCE_MONITORING,
            },
        }

    except Exception as e:
        logger.error(f"메트릭 조회 실패: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"메트릭 조회 실패: {str(e)}")


# ========== Exception Handlers ==========


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    전역 예외 핸들러

    예상치 못한 오류 처리
    """
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "subway.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
        timeout_keep_alive=30,
    )
