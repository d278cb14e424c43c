"""Best-effort delivery of form submissions to chat webhooks."""

import asyncio
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from formulator.config.settings import Settings
from formulator.lib.exceptions import WebhookDeliveryException, format_exception_details
from formulator.notifications.webhooks import DiscordWebhook, SlackWebhook, WebhookTarget
from formulator.utils.logger import setup_logger

dispatch_logger = setup_logger("formulator.notifications")


@dataclass
class DispatchResult:
    """Delivery outcome for one webhook target."""
    target: str
    delivered: bool
    error: Optional[str] = None


class NotificationDispatcher:
    """Sends validated submissions to every configured webhook."""

    def __init__(self, targets: Iterable[WebhookTarget] = ()):
        self.targets = list(targets)

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotificationDispatcher":
        """Create one target per configured webhook URL."""
        targets = []
        if settings.discord_webhook_url:
            targets.append(DiscordWebhook(settings.discord_webhook_url, settings.webhook_timeout))
        if settings.slack_webhook_url:
            targets.append(SlackWebhook(settings.slack_webhook_url, settings.webhook_timeout))
        return cls(targets)

    async def dispatch(self, fields: Mapping[str, Any]) -> List[DispatchResult]:
        """
        Deliver fields to all targets concurrently.

        Failures are logged and returned, never raised.

        Args:
            fields: Validated form fields

        Returns:
            One result per target
        """
        if not self.targets:
            return []
        return list(await asyncio.gather(*(self._deliver(target, fields) for target in self.targets)))

    async def _deliver(self, target: WebhookTarget, fields: Mapping[str, Any]) -> DispatchResult:
        try:
            await target.send(fields)
        except WebhookDeliveryException as e:
            dispatch_logger.error(format_exception_details(e))
            return DispatchResult(target=target.name, delivered=False, error=e.message)
        except Exception as e:
            dispatch_logger.exception(
                "webhook_unexpected_error",
                extra={"data": {"target": target.name, "error_type": type(e).__name__}}
            )
            return DispatchResult(target=target.name, delivered=False, error=str(e))

        dispatch_logger.info("webhook_delivered", extra={"data": {"target": target.name}})
        return DispatchResult(target=target.name, delivered=True)
