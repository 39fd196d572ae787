"""blogpipe - blog crawler and AI augmentation pipeline."""

__version__ = "0.1.0"
