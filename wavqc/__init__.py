"""Quality control for 8 kHz 16-bit mono PCM WAVE files."""
__version__ = "0.1.0"
