"""gh-widgets: declarative GitHub dashboard widgets."""

__version__ = "0.1.0"
