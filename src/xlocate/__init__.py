"""Find games installed through the Xbox app on PC."""

__version__ = "0.1.0"
