"""Tests for best-effort webhook dispatch."""

from unittest.mock import AsyncMock

import pytest

from formulator.config.settings import Settings
from formulator.lib.exceptions import WebhookDeliveryException
from formulator.notifications.dispatcher import NotificationDispatcher
from formulator.notifications.webhooks import DiscordWebhook, SlackWebhook


def test_from_settings_without_webhooks():
    """Test that no configured URL means no targets."""
    dispatcher = NotificationDispatcher.from_settings(Settings())

    assert dispatcher.targets == []


def test_from_settings_with_both_webhooks():
    """Test that each configured URL becomes a target."""
    settings = Settings(
        discord_webhook_url='https://discord.test/hook',
        slack_webhook_url='https://slack.test/hook',
        webhook_timeout=4,
    )

    dispatcher = NotificationDispatcher.from_settings(settings)

    assert [type(target) for target in dispatcher.targets] == [DiscordWebhook, SlackWebhook]
    assert all(target.timeout == 4 for target in dispatcher.targets)


@pytest.mark.asyncio
async def test_dispatch_without_targets():
    """Test that dispatch is a no-op without targets."""
    assert await NotificationDispatcher().dispatch({'email': 'a@b.com'}) == []


@pytest.mark.asyncio
async def test_dispatch_sends_to_every_target():
    """Test that all targets receive the fields."""
    discord = DiscordWebhook('https://discord.test/hook')
    slack = SlackWebhook('https://slack.test/hook')
    discord.send = AsyncMock()
    slack.send = AsyncMock()

    results = await NotificationDispatcher([discord, slack]).dispatch({'email': 'a@b.com'})

    discord.send.assert_awaited_once_with({'email': 'a@b.com'})
    slack.send.assert_awaited_once_with({'email': 'a@b.com'})
    assert [(result.target, result.delivered) for result in results] == [
        ('discord', True),
        ('slack', True),
    ]


@pytest.mark.asyncio
async def test_dispatch_failure_does_not_stop_other_targets():
    """Test that one failing target does not prevent the others."""
    discord = DiscordWebhook('https://discord.test/hook')
    slack = SlackWebhook('https://slack.test/hook')
    discord.send = AsyncMock(side_effect=WebhookDeliveryException('discord', 'discord webhook returned 500', 500))
    slack.send = AsyncMock()

    results = await NotificationDispatcher([discord, slack]).dispatch({'email': 'a@b.com'})

    slack.send.assert_awaited_once()
    assert results[0].delivered is False
    assert results[0].error == 'discord webhook returned 500'
    assert results[1].delivered is True


@pytest.mark.asyncio
async def test_dispatch_swallows_unexpected_errors():
    """Test that unexpected exceptions are reported as failed deliveries."""
    slack = SlackWebhook('https://slack.test/hook')
    slack.send = AsyncMock(side_effect=RuntimeError('boom'))

    results = await NotificationDispatcher([slack]).dispatch({'email': 'a@b.com'})

    assert results[0].delivered is False
    assert results[0].error == 'boom'
