"""
Background jobs.

- scheduled_publisher: promotes due "future" posts to "publish"
"""

from inkpress.worker.scheduled_publisher import PublishRunResult, ScheduledPublisher

__all__ = ["PublishRunResult", "ScheduledPublisher"]
