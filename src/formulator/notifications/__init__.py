"""Chat webhook notifications for accepted submissions."""

from formulator.notifications.dispatcher import NotificationDispatcher, DispatchResult
from formulator.notifications.webhooks import DiscordWebhook, SlackWebhook, WebhookTarget

__all__ = ['NotificationDispatcher', 'DispatchResult', 'DiscordWebhook', 'SlackWebhook', 'WebhookTarget']
