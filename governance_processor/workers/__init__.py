"""Run drivers and batch processing.

- EventDispatcher: applies one batch under the batch error policy
- ProcessingCycle: fetch, dispatch, advance watermark
- PollingScheduler: cron-driven cycles
- NotificationWorker: notification-driven cycles
"""
