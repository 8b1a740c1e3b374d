from __future__ import annotations
import os


# Defaults
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_SOURCE_ENCODING = 'utf-8'
_DEFAULT_RECURSION_LIMIT = 10_000

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return raw.strip()


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_log_level() -> str:
    level = str_from_env('FLINT_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
    return level if level in LOG_LEVELS else _DEFAULT_LOG_LEVEL


def get_source_encoding() -> str:
    return str_from_env('FLINT_SOURCE_ENCODING', _DEFAULT_SOURCE_ENCODING)


def get_recursion_limit() -> int:
    # each script call frame costs several Python frames in the tree walker
    return int_from_env('FLINT_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)
