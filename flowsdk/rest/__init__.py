"""Client for the Flow REST Access API: models, HTTP transport, conversion and clients."""

__all__ = ["models", "handler", "convert", "client"]