"""Meeting-minutes service: audio compression, model call and document export."""

__version__ = "0.1.0"
