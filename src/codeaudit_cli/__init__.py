"""Client-side source code quality analyzer."""

__version__ = "0.1.0"
