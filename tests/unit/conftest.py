"""
Unit test fixtures.

Isolates unit tests from environment variables (.env file)
to ensure tests verify actual default values.

License: MIT
"""

import os

import pytest


# Environment variables that affect RankMergeSettings defaults
CONFIG_ENV_VARS = [
    "RANKMERGE_DEFAULT_STRATEGY",
    "RANKMERGE_RRF_K",
    "RANKMERGE_NORMALIZE",
    "RANKMERGE_DEPTH",
    "RANKMERGE_MAX_WORKERS",
    "RANKMERGE_RUN_ID",
    "RANKMERGE_LOG_LEVEL",
    "RANKMERGE_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env_for_unit_tests(monkeypatch, tmp_path):
    """
    Remove all config-related environment variables and change working
    directory to avoid loading .env file.
    """
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)
