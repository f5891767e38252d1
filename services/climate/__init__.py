"""WeatherInsight climate summary service."""
