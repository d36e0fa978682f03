# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Configuration loading with Pydantic validation and env var substitution."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """Connection to the database under test."""
    # SQLAlchemy URI (env vars already substituted).
    # None runs the generator without a schema.
    uri: Optional[str] = None

    # Only tables in this schema are discovered
    target_schema: str = "public"

    # Passed through to sqlalchemy.create_engine
    connect_args: dict[str, Any] = Field(default_factory=dict)

    def is_schemaless(self) -> bool:
        """True when no database is configured."""
        return not self.uri


class Config(BaseModel):
    """Root configuration model."""
    model_config = {"extra": "ignore"}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    # Seed for the schema cache's random source. None seeds from the OS.
    seed: Optional[int] = None

    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """
        Load config from YAML file with env var substitution.

        Args:
            path: Path to the config YAML file

        Returns:
            Validated Config object
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw_content = f.read()

        # Substitute environment variables: ${VAR_NAME}
        substituted = _substitute_env_vars(raw_content)

        data = yaml.safe_load(substituted) or {}
        return cls.model_validate(data)


def _substitute_env_vars(content: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r'\$\{([^}]+)\}')

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable not set: {var_name}")
        return value

    return pattern.sub(replacer, content)
