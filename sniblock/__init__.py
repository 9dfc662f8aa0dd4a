"""Find the server name in TLS Client Hellos and reset matching connections with forged TCP resets."""

__version__ = "0.1.0"