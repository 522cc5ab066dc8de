"""Signcraft - Turn text into printable 3D signs.

Signcraft lays out one or more lines of text with a TrueType/OpenType
font, extrudes every letter into a solid with a chamfered top edge and
stands the letters on a rectangular base plate. The result is written as
an ASCII STL or a 3MF package.

Example:
    $ signcraft "HELLO\\nWORLD" --font Arial.ttf --align center -o hello.3mf

This will create hello.3mf with a 2mm plate and 5mm raised letters.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
