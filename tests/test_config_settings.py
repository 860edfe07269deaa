from __future__ import annotations

import pytest
from pydantic import ValidationError

from academy.core.config import Settings


def test_debug_allowed_in_development() -> None:
    settings = Settings(_env_file=None, app_env="development", debug=True)
    assert settings.debug is True


def test_debug_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="production", debug=True)


def test_log_level_is_normalized() -> None:
    settings = Settings(_env_file=None, log_level=" debug ")
    assert settings.log_level == "DEBUG"


def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_bulk_limit_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, bulk_operation_max_items=0)
