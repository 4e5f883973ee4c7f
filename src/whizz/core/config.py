"""Environment variable management for Whizz operations."""

from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from whizz.constants import DEFAULT_CHUNK_SIZE
from whizz.constants import DEFAULT_MISSING_VALUE
from whizz.constants import DEFAULT_PREVIEW_RECORDS
from whizz.exceptions import EnvironmentFormatError


class WhizzSettings(BaseSettings):
    """Whizz environment configuration settings."""

    # Import configuration
    missing_value: float = Field(
        default=DEFAULT_MISSING_VALUE,
        description="Value written in place of XYZ dummies",
        alias="WHIZZ__IMPORT__MISSING_VALUE",
    )
    preview_records: int = Field(
        default=DEFAULT_PREVIEW_RECORDS,
        ge=0,
        description="Number of leading XYZ records logged when a file is scanned",
        alias="WHIZZ__IMPORT__PREVIEW_RECORDS",
    )
    progress: bool = Field(
        default=True,
        description="Whether to show a progress bar while writing lines",
        alias="WHIZZ__IMPORT__PROGRESS",
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        gt=0,
        description="Maximum chunk length of channel arrays",
        alias="WHIZZ__IMPORT__CHUNK_SIZE",
    )

    # General configuration
    ignore_checks: bool = Field(
        default=False,
        description="Whether to downgrade consistency checks to warnings",
        alias="WHIZZ_IGNORE_CHECKS",
    )

    model_config = SettingsConfigDict(case_sensitive=True)

    @field_validator("progress", "ignore_checks", mode="before")
    @classmethod
    def parse_bool_fields(cls, v: object) -> bool:
        """Parse boolean fields leniently."""
        if v is None:
            return False
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes", "on")
        return bool(v)


_ENV_VAR_NAMES = {name: field.alias for name, field in WhizzSettings.model_fields.items()}


def get_settings() -> WhizzSettings:
    """Get current Whizz settings from environment variables."""
    try:
        return WhizzSettings()
    except ValidationError as e:
        error_details = e.errors()[0]
        field_name = error_details.get("loc", [None])[0]
        error_type = error_details.get("type", "unknown")

        type_mapping = {
            "int_parsing": "int",
            "float_parsing": "float",
            "greater_than": "positive int",
            "greater_than_equal": "non-negative int",
        }
        mapped_type = type_mapping.get(error_type, error_type)
        env_var = _ENV_VAR_NAMES.get(field_name, field_name)

        raise EnvironmentFormatError(env_var, mapped_type) from e
