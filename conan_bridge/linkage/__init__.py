"""
Linker directives for the calling build
"""

from .directives import LinkKind, emit
from .package import ConanPackage, LIBRARY_EXTENSIONS

__all__ = ["ConanPackage", "LIBRARY_EXTENSIONS", "LinkKind", "emit"]
