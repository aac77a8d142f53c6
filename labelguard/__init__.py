"""Food label safety classifier: ingredient risk, health score and dietary flags."""

__version__ = "0.1.0"
