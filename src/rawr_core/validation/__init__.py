"""RAW file validation"""

from .raw_validator import RawFileValidator

__all__ = ["RawFileValidator"]
