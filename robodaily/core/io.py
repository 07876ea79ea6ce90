"""JSON I/O utilities with consistent error handling."""

import json
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_json(
    path: Union[str, Path],
    default: T = None,
    *,
    encoding: str = "utf-8",
    log_errors: bool = True,
) -> Union[Any, T]:
    """
    Load JSON file with consistent error handling.

    Args:
        path: Path to JSON file
        default: Default value if file doesn't exist, is empty or is invalid
        encoding: File encoding (default: utf-8)
        log_errors: Whether to log errors (default: True)

    Returns:
        Parsed JSON data or default value
    """
    path = Path(path)

    if not path.exists():
        return default

    try:
        content = path.read_text(encoding=encoding).strip()
        if not content:
            return default
        return json.loads(content)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        if log_errors:
            logger.warning(f"Failed to load {path}: {e}")
        return default


def save_json(
    data: Any,
    path: Union[str, Path],
    *,
    encoding: str = "utf-8",
    indent: int = 2,
    ensure_ascii: bool = False,
    mkdir: bool = True,
) -> Path:
    """
    Save data to JSON file, replacing any previous content in one step.

    The document is written to a temporary sibling first and then moved
    over the target, so readers never observe a half-written file.

    Args:
        data: Data to serialize
        path: Output file path
        encoding: File encoding (default: utf-8)
        indent: JSON indentation (default: 2)
        ensure_ascii: Whether to escape non-ASCII (default: False)
        mkdir: Create parent directories if needed (default: True)

    Returns:
        The written path
    """
    path = Path(path)

    if mkdir:
        path.parent.mkdir(parents=True, exist_ok=True)

    content = json.dumps(data, ensure_ascii=ensure_ascii, indent=indent)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(content, encoding=encoding)
    os.replace(tmp_path, path)
    return path
