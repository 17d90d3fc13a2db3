"""A select()-driven HTTP/1.1 file server and an interactive time-protocol client."""

__version__ = "0.1.0"
__all__ = ["common", "connection", "server", "client"]