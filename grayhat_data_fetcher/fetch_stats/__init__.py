from .fetch_stats import fetch_stats

__all__ = ["fetch_stats"]
