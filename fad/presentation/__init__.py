"""
Presentation — Display layer for git-fad

- Symbols: Visual vocabulary (unicode/ascii)
- safe_print: Encoding-safe output for arbitrary file names
"""

from .symbols import SymbolSet, get_symbols, supports_unicode, safe_print, UNICODE, ASCII

__all__ = [
    "SymbolSet", "get_symbols", "supports_unicode", "safe_print", "UNICODE", "ASCII",
]
