"""pets - declarative host configuration from annotated config files."""

__version__ = "0.1.0"
