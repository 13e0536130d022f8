import os
from typing import Dict, Any
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기


class Settings:
    PROJECT_NAME: str = "Subway Admin Backend"
    VERSION: str = "1.0.0"

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 8080))

    # 저장소 선택: postgres(운영) / memory(로컬 개발, 테스트)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "postgres").lower()

    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", 5432))
    DB_NAME: str = os.getenv("DB_NAME", "subway")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "password")
    DB_SSLMODE: str = os.getenv("DB_SSLMODE", "prefer")

    # 커넥션 풀 크기
    DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", 2))
    DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", 20))

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    ).split(",")

    # 성능 모니터링
    ENABLE_PERFORMANCE_MONITORING: bool = (
        os.getenv("ENABLE_PERFORMANCE_MONITORING", "true").lower() == "true"
    )
    SLOW_REQUEST_THRESHOLD_MS: float = float(
        os.getenv("SLOW_REQUEST_THRESHOLD_MS", 500)
    )

    @property
    def DB_CONFIG(self) -> Dict[str, Any]:
        return {
            "host": self.DB_HOST,
            "port": self.DB_PORT,
            "database": self.DB_NAME,
            "user": self.DB_USER,
            "password": self.DB_PASSWORD,
            "sslmode": self.DB_SSLMODE,
            "connect_timeout": 30,
        }

    @property
    def use_memory_store(self) -> bool:
        return self.STORAGE_BACKEND == "memory"


settings = Settings()  # 모듈화
