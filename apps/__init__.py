"""Domain apps of the hotel booking service."""
