from .orchestrator import update_feed, update_feeds

__all__ = ["update_feed", "update_feeds"]
