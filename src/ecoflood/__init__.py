"""EcoFlood: flood risk simulation and environmental data service for Indonesia."""

__version__ = "0.1.0"
