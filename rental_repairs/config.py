"""Application configuration via Pydantic Settings.

NOTE: env variable names are mapped explicitly (UNIT_ASSIGNMENT_LIMIT,
UNIT_LIMIT_SCOPE, LOG_LEVEL, DEBUG) to avoid silent misconfiguration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from rental_repairs.domain.value_objects.enums import UnitLimitScope


class Settings(BaseSettings):
    # Scheduling rules
    unit_assignment_limit: int = Field(
        default=2,
        ge=1,
        validation_alias="UNIT_ASSIGNMENT_LIMIT",
    )
    unit_limit_scope: UnitLimitScope = Field(
        default=UnitLimitScope.SAME_DATE,
        validation_alias="UNIT_LIMIT_SCOPE",
    )

    # App
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
