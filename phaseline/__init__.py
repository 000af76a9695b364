"""Construction timeline engine: phases, material sub-timelines, conflicts and auto-shift."""

__version__ = "0.1.0"
