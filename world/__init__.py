# world/__init__.py
"""
World module: the clock and weather around the compost yard.

Provides:
- Weather system implementing the composting ClimateProvider (from weather.py)
"""

# Weather system
from world.weather import WeatherSystem

__all__ = [
    # Weather
    "WeatherSystem",
]
