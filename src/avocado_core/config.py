# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AvocadoConfig(BaseSettings):
    """
    Configuration for resource resolution, content loading and JSON files.
    """

    fetch_timeout: float = Field(default=30.0, gt=0)
    encoding: str = "utf-8"

    # Temporary copies of remote and archived resources
    temp_dir: Path | None = None
    temp_prefix: str = "avocado-"

    # Search path for "/name" references, scanned in order
    resource_path: list[Path] = []
    include_sys_path: bool = True

    json_indent: int | None = 2
    user_agent: str = "avocado-core/0.1.0"

    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    model_config = SettingsConfigDict(
        env_prefix="AVOCADO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
