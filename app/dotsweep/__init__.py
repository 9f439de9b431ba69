"""dotsweep - filesystem hygiene for transient editor and tool artifacts."""

__version__ = "0.3.0"
