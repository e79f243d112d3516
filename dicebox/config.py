"""配置管理模块"""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .dice import SortMode


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # 日志配置
    log_level: str = "INFO"
    log_path: Path = Path("logs")

    # Web 服务配置
    web_host: str = "0.0.0.0"
    web_port: int = 3000
    debug: bool = False
    max_body_bytes: int = Field(16 * 1024, gt=0)  # 请求体上限 16KB

    # 骰点限制
    max_total_dice: int = Field(10000, gt=0)
    max_sides: int = Field(1000000, gt=0)
    max_repeat: int = Field(100, gt=0)
    max_result: int = Field(10 ** 15, gt=0)

    # 骰点语义
    sort_mode: SortMode = SortMode.KEEP_HIGHEST
    rng_seed: Optional[int] = None  # 固定种子，便于复现

    def safe_dict(self) -> dict:
        """返回可直接写入日志的配置字典"""
        return self.model_dump(mode="json")

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self.safe_dict().items())
        return f"Settings({items})"

    def __str__(self) -> str:
        return self.__repr__()


settings = Settings()
