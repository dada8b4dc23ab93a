from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the tracking backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("FITTRACK_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("FITTRACK_DB_PATH") or (self.data_root / "fittrack.db")
        ).expanduser()
        # In production you MUST set FITTRACK_JWT_SECRET. The dev secret keeps local demos easy.
        self.jwt_secret: str = os.environ.get("FITTRACK_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("FITTRACK_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("FITTRACK_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}

        # ---- Meal plan generation (OpenAI-compatible chat completions) ----
        self.meal_plan_api_key: str | None = os.environ.get("MEAL_PLAN_API_KEY")
        self.meal_plan_base_url: str = os.environ.get(
            "MEAL_PLAN_BASE_URL", "https://dashscope.aliyuncs.com/compatible-mode/v1"
        )
        self.meal_plan_model: str = os.environ.get("MEAL_PLAN_MODEL", "qwen-plus")
        self.meal_plan_timeout: float = float(os.environ.get("MEAL_PLAN_TIMEOUT", "60"))
        self.meal_plan_max_tokens: int = int(os.environ.get("MEAL_PLAN_MAX_TOKENS", "4096"))
        self.meal_plan_temperature: float = float(os.environ.get("MEAL_PLAN_TEMPERATURE", "0.4"))

        cors = os.environ.get("FITTRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
