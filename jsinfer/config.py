from __future__ import annotations

from dataclasses import dataclass

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import constants as cs
from . import exceptions as ex

load_dotenv()


@dataclass(frozen=True)
class InferenceConfig:
    max_depth: int = cs.DEFAULT_MAX_DEPTH
    max_time: int = cs.DEFAULT_MAX_TIME_MS
    max_iterations: int = cs.DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(ex.MAX_DEPTH_POSITIVE)
        if self.max_time < 0:
            raise ValueError(ex.MAX_TIME_NON_NEGATIVE)
        if self.max_iterations < 1:
            raise ValueError(ex.MAX_ITERATIONS_POSITIVE)


class InferenceSettings(BaseSettings):
    """
    (H) All settings are loaded from environment variables or a .env file.
    (H) A max time of 0 disables the wall-clock budget.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    INFERENCE_MAX_DEPTH: int = cs.DEFAULT_MAX_DEPTH
    INFERENCE_MAX_TIME_MS: int = cs.DEFAULT_MAX_TIME_MS
    INFERENCE_MAX_ITERATIONS: int = cs.DEFAULT_MAX_ITERATIONS

    def resolve_config(
        self,
        max_depth: int | None = None,
        max_time: int | None = None,
        max_iterations: int | None = None,
    ) -> InferenceConfig:
        return InferenceConfig(
            max_depth=self.INFERENCE_MAX_DEPTH if max_depth is None else max_depth,
            max_time=self.INFERENCE_MAX_TIME_MS if max_time is None else max_time,
            max_iterations=(
                self.INFERENCE_MAX_ITERATIONS
                if max_iterations is None
                else max_iterations
            ),
        )


settings = InferenceSettings()
