"""
Built-in tools.
"""

from .calculator import CalculatorTool, evaluate_expression
from .lookup import DatabaseTool, SearchTool, WeatherTool

__all__ = [
    "CalculatorTool",
    "DatabaseTool",
    "SearchTool",
    "WeatherTool",
    "evaluate_expression",
]
