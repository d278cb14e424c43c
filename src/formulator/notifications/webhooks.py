"""Chat webhook clients for form notifications."""

import asyncio
import json
from typing import Any, Mapping

import httpx

from formulator.lib.exceptions import WebhookDeliveryException


class WebhookTarget:
    """Base client posting a rendered JSON message to a webhook URL."""

    name = "webhook"
    content_type = "application/json"
    retry_delay = 2.0

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def render(self, fields: Mapping[str, Any]) -> dict:
        """Build the message body for the given form fields."""
        raise NotImplementedError

    async def send(self, fields: Mapping[str, Any]) -> None:
        """
        Deliver form fields to the webhook.

        Args:
            fields: Validated form fields

        Raises:
            WebhookDeliveryException: If the webhook cannot be reached or
                does not answer with a 2xx status
        """
        headers = {
            'Content-Type': self.content_type,
            'User-Agent': 'Formulator'
        }
        content = json.dumps(self.render(fields))

        try:
            async with httpx.AsyncClient() as client:
                # First attempt
                response = await client.post(self.url, content=content, headers=headers, timeout=self.timeout)

                if 200 <= response.status_code < 300:
                    return

                # Retry once on 5xx
                if 500 <= response.status_code < 600:
                    await asyncio.sleep(self.retry_delay)
                    response = await client.post(self.url, content=content, headers=headers, timeout=self.timeout)
                    if 200 <= response.status_code < 300:
                        return
        except httpx.HTTPError as e:
            raise WebhookDeliveryException(
                self.name,
                f"{self.name} webhook request failed: {e.__class__.__name__}"
            ) from e

        raise WebhookDeliveryException(
            self.name,
            f"{self.name} webhook returned {response.status_code}",
            status_code=response.status_code
        )


class DiscordWebhook(WebhookTarget):
    """Posts form fields as a single Discord embed."""

    name = "discord"
    content_type = "application/json;charset=UTF-8"

    def render(self, fields: Mapping[str, Any]) -> dict:
        return {
            "embeds": [{
                "fields": [{"name": name, "value": str(value)} for name, value in fields.items()]
            }]
        }


class SlackWebhook(WebhookTarget):
    """Posts form fields as one Slack section block."""

    name = "slack"
    content_type = "application/json"

    def render(self, fields: Mapping[str, Any]) -> dict:
        return {
            "blocks": [{
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*{name}*\n{value}"}
                    for name, value in fields.items()
                ]
            }]
        }
