"""
Data Package
Provides loading, categorical normalization and filtering of flight records
"""

from .categories import DayOfWeek, Month, to_categorical
from .flight_filter import FlightFilter, TopAirports, filter_flights
from .flight_loader import FlightDataLoader, load_flights, normalize_categoricals

__all__ = [
    "DayOfWeek",
    "Month",
    "to_categorical",
    "FlightFilter",
    "TopAirports",
    "filter_flights",
    "FlightDataLoader",
    "load_flights",
    "normalize_categoricals",
]
