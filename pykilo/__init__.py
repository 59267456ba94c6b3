"""A small terminal text editor: buffer, key decoding, raw-mode terminal and command."""

__version__ = "0.0.1"