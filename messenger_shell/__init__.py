"""Single-window desktop shell around a remote web page."""

__version__ = "1.0.0"
