"""singletimer: a single countdown timer served over HTTP."""

__version__ = "0.1.0"
