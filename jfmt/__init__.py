"""jfmt: a small Java linter with safe autofixes."""

__version__ = "0.1.0"
