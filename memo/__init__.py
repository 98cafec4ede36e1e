"""memo: a personal command-line note manager."""

__version__ = "0.0.4"
