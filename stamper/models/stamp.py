# stamper/models/stamp.py

from enum import Enum
from typing import NamedTuple


class InvalidInput(ValueError):
    """Raised when an instant or variant cannot be turned into a version stamp."""


class BuildVariant(Enum):
    RELEASE = 'release'
    DEBUG = 'debug'

    @classmethod
    def parse(cls, value) -> 'BuildVariant':
        """Returns the build variant for a name like 'release' or 'Debug'."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidInput(f"Build variant must be a string, got {type(value).__name__}")
        key = value.strip().lower()
        for variant in cls:
            if variant.value == key:
                return variant
        allowed = ', '.join(v.value for v in cls)
        raise InvalidInput(f"Unknown build variant '{value}' (expected one of: {allowed})")

    @property
    def title(self) -> str:
        """Returns the capitalized form used in combined variant names (e.g. 'Release')."""
        return self.value.capitalize()


class VersionStamp(NamedTuple):
    """Version identifiers for one build variant, derived from a single instant."""
    code: int
    name: str

    def to_dict(self) -> dict:
        return {
            'versionCode': self.code,
            'versionName': self.name,
        }
