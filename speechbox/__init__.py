"""speechbox: text-to-speech demo backend (record API + direct playback)."""

__version__ = "0.1.0"
