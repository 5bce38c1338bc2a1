"""StayVision: "Simulate Your Stay" previews for holiday rental properties."""

__version__ = "0.1.0"
