"""Language server for Logseq note files."""

__version__ = "0.1.0"
