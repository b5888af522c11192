"""Event query service: normalize event records and answer filtered queries."""

__version__ = "0.1.0"
