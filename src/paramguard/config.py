"""
Configuration for paramguard.

Holds the fixed vocabularies used by the rule compiler and the settings
consumed by the request validator.
"""

import os
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

SUPPORTED_TYPES = ["string", "number", "boolean", "numeric", "date", "array", "object"]
SUPPORTED_ARRAY_TYPES = ["string", "number", "boolean", "numeric"]

# Section name -> label used to prefix generated messages
SECTION_LABELS = {
    "url": "Url",
    "query": "Query",
    "body": "Body",
}

DISALLOW_EXTRA_FIELDS_KEY = "disallowExtraFields"
DEFAULT_MESSAGE_KEY = "default"

ENV_PREFIX = "PARAMGUARD_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


class ValidatorSettings(BaseModel):
    """Settings for a RequestValidator instance."""

    fail_on_first_error: bool = True
    array_separator: str = Field(default=",", min_length=1)

    @classmethod
    def from_env(
        cls, env_file: Optional[Union[str, os.PathLike]] = None
    ) -> "ValidatorSettings":
        """
        Build settings from environment variables.

        Loads a .env file first (existing variables win), then reads:
            PARAMGUARD_FAIL_ON_FIRST_ERROR: true/false
            PARAMGUARD_ARRAY_SEPARATOR: separator for URL array values

        Args:
            env_file: Optional path to a .env file (default: search upwards)

        Returns:
            ValidatorSettings
        """
        load_dotenv(dotenv_path=env_file)

        values = {}
        fail_first = os.getenv(f"{ENV_PREFIX}FAIL_ON_FIRST_ERROR")
        if fail_first is not None:
            values["fail_on_first_error"] = fail_first.strip().lower() in _TRUE_STRINGS
        separator = os.getenv(f"{ENV_PREFIX}ARRAY_SEPARATOR")
        if separator is not None:
            values["array_separator"] = separator

        return cls(**values)


__all__ = [
    "SUPPORTED_TYPES",
    "SUPPORTED_ARRAY_TYPES",
    "SECTION_LABELS",
    "DISALLOW_EXTRA_FIELDS_KEY",
    "DEFAULT_MESSAGE_KEY",
    "ValidatorSettings",
]
