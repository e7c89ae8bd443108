"""Translation file loading package.

Submodules:
    text_domain - TextDomain, the immutable first-writer-wins mapping
    files       - SourceFile, FileLoader protocol, ini and YAML loaders

Python 3.13+.
"""

from textdomains.loading.files import (
    FileLoader,
    IniFileLoader,
    SourceFile,
    SourceFileLoader,
    YamlFileLoader,
)
from textdomains.loading.text_domain import TextDomain

__all__ = [
    "FileLoader",
    "IniFileLoader",
    "SourceFile",
    "SourceFileLoader",
    "TextDomain",
    "YamlFileLoader",
]
