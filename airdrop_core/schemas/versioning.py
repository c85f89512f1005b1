"""
Module 01 - Schemas
File: versioning.py
Purpose: Version tag carried by every exchange document.

Documents are tagged "v<major>". Readers reject tags they do not
understand instead of guessing at field meanings. Nothing else from the
schema package may be imported here.
"""
import re


SCHEMA_VERSION: str = "v1"

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({SCHEMA_VERSION})

_VERSION_TAG = re.compile(r"^v(\d+)$")


class UnsupportedSchemaVersionError(ValueError):
    """Raised when a document carries a version tag this reader cannot handle."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"Unsupported schema version {version!r}; "
            f"supported: {', '.join(sorted(SUPPORTED_SCHEMA_VERSIONS))}"
        )


def schema_major(version: str) -> int:
    """
    Major number of a "v<N>" tag.

    Raises:
        UnsupportedSchemaVersionError: If the tag is malformed
    """
    match = _VERSION_TAG.match(version)
    if match is None:
        raise UnsupportedSchemaVersionError(version)
    return int(match.group(1))


def is_compatible_schema_version(version: str) -> bool:
    return version in SUPPORTED_SCHEMA_VERSIONS


def assert_supported_schema_version(version: str) -> None:
    """
    Raises:
        UnsupportedSchemaVersionError: If the tag is malformed or unknown
    """
    schema_major(version)
    if not is_compatible_schema_version(version):
        raise UnsupportedSchemaVersionError(version)
