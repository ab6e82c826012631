"""Read query files from a directory."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from typedsql.core.types import QueryUnit
from typedsql.exceptions import ConfigurationError, NameCollisionError
from typedsql.introspect.descriptor import GO_KEYWORDS

logger = logging.getLogger(__name__)

QUERY_SUFFIX = ".sql"

# "db" is the field on the generated Queries struct; a method may not share its name.
RESERVED_IDENTIFIERS = GO_KEYWORDS | {"db"}

_INVALID_CHARS = re.compile(r"\W")


def sanitize_identifier(stem: str) -> str:
    """Turn a file name stem into a valid Go identifier.

    Examples:
        "GetUser" -> "GetUser"
        "get user-by id" -> "get_user_by_id"
        "2fa_codes" -> "Q2fa_codes"
        "select" -> "select_"
    """
    identifier = _INVALID_CHARS.sub("_", stem)
    if not identifier:
        identifier = "_"
    if identifier[0].isdigit():
        identifier = f"Q{identifier}"
    if identifier in RESERVED_IDENTIFIERS:
        identifier = f"{identifier}_"
    return identifier


def load_query_units(directory: str | Path) -> list[QueryUnit]:
    """Load every .sql file in a directory, in file-name order.

    Args:
        directory: Directory holding one query per file

    Returns:
        One QueryUnit per query file

    Raises:
        ConfigurationError: If the directory or a file cannot be read
        NameCollisionError: If two files map to the same identifier
    """
    path = Path(directory)
    if not path.is_dir():
        raise ConfigurationError(
            f"Query directory '{path}' does not exist or is not a directory.",
            {"directory": str(path)},
        )

    try:
        entries = sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read query directory '{path}': {e}", {"directory": str(path)}
        ) from e

    units: list[QueryUnit] = []
    sources: dict[str, Path] = {}
    for entry in entries:
        if not entry.name.endswith(QUERY_SUFFIX) or not entry.is_file():
            logger.debug(f"Skipping {entry.name}: not a {QUERY_SUFFIX} file")
            continue

        unit = load_query_file(entry)
        if unit.identifier in sources:
            raise NameCollisionError(
                unit.identifier,
                unit.identifier,
                "query",
                reason=f"files '{sources[unit.identifier].name}' and '{entry.name}' "
                f"both map to identifier '{unit.identifier}'",
            )
        sources[unit.identifier] = entry
        units.append(unit)

    logger.info(f"Loaded {len(units)} query file(s) from {path}")
    return units


def load_query_file(path: str | Path) -> QueryUnit:
    """Load a single query file.

    Raises:
        ConfigurationError: If the file cannot be read or decoded
    """
    path = Path(path)
    stem = path.name[: -len(QUERY_SUFFIX)] if path.name.endswith(QUERY_SUFFIX) else path.stem
    return QueryUnit(
        identifier=sanitize_identifier(stem), raw_text=_read_query(path), source_path=path
    )


def _read_query(path: Path) -> str:
    try:
        # utf-8-sig drops the BOM that SSMS writes by default
        return path.read_bytes().decode("utf-8-sig")
    except OSError as e:
        raise ConfigurationError(f"Cannot read query file '{path}': {e}", {"file": str(path)}) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            f"Query file '{path}' is not valid UTF-8: {e}", {"file": str(path)}
        ) from e
