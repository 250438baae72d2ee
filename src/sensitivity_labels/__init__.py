"""
Sensitivity Labels Package

Reads and rewrites the Microsoft sensitivity-label metadata stored in
Office Open XML containers (.docx, .xlsx, .pptx).

PIPELINE:
---------
    discovery -> archive (extract) -> locator -> codec (decode)
        -> report
        -> mutator: codec (encode) -> archive (pack) -> atomic replace

The core modules receive all options explicitly. Only `cli` knows about
command-line flags and console output.
"""

__version__ = "0.1.0"
