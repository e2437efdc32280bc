"""
Dialect definitions sub-package for robocopy-log-parser.

Contains YAML files that define the encoding, timestamp format and
recognized header/footer keys of each supported Robocopy log dialect.
The loader module (dialect_registry.py in the parent package) reads
these files at runtime.
"""
