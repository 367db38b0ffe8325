"""HotelIntel: ancillary service performance dashboard and strategy analysis."""

__version__ = "0.3.0"
