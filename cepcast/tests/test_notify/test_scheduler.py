"""Tests for reminder scheduling and notifier collaborators."""

import asyncio
import json
import logging
from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from cepcast.config.schema import NotificationConfig
from cepcast.notify.notifiers import LogNotifier, WebhookNotifier
from cepcast.notify.scheduler import NotificationScheduler

WEBHOOK = "https://hooks.example.com/reminders"


class TestScheduleReminder:
    def test_sends_title_and_message(self):
        notifier = AsyncMock()
        scheduler = NotificationScheduler(notifier, title="Amanhã")

        async def _run():
            scheduler.schedule_reminder("Sol em São Paulo")
            await scheduler.drain()

        asyncio.run(_run())
        notifier.send.assert_awaited_once_with("Amanhã", "Sol em São Paulo")
        assert scheduler.pending == 0

    def test_does_not_wait_for_delivery(self):
        async def _run():
            released = asyncio.Event()
            notifier = AsyncMock()

            async def _slow_send(title, message):
                await released.wait()

            notifier.send.side_effect = _slow_send
            scheduler = NotificationScheduler(notifier, title="t")
            scheduler.schedule_reminder("m")
            # Returned before the collaborator finished.
            assert scheduler.pending == 1
            released.set()
            await scheduler.drain()
            assert scheduler.pending == 0

        asyncio.run(_run())

    def test_collaborator_failure_is_logged_not_raised(self, caplog):
        notifier = AsyncMock()
        notifier.send.side_effect = RuntimeError("channel unavailable")
        scheduler = NotificationScheduler(notifier, title="t")

        async def _run():
            scheduler.schedule_reminder("m")
            await scheduler.drain()

        with caplog.at_level(logging.ERROR):
            asyncio.run(_run())
        assert "Reminder dispatch failed" in caplog.text

    def test_disabled_is_noop(self):
        notifier = AsyncMock()
        scheduler = NotificationScheduler(notifier, title="t", enabled=False)

        async def _run():
            scheduler.schedule_reminder("m")
            await scheduler.drain()

        asyncio.run(_run())
        notifier.send.assert_not_called()

    def test_without_event_loop_is_noop(self):
        notifier = AsyncMock()
        scheduler = NotificationScheduler(notifier, title="t")
        scheduler.schedule_reminder("m")
        assert scheduler.pending == 0

    def test_drain_timeout_cancels_stragglers(self):
        async def _run():
            notifier = AsyncMock()

            async def _hang(title, message):
                await asyncio.sleep(60)

            notifier.send.side_effect = _hang
            scheduler = NotificationScheduler(notifier, title="t")
            scheduler.schedule_reminder("m")
            await scheduler.drain(timeout=0.01)
            return scheduler.pending

        assert asyncio.run(_run()) == 0


class TestFromConfig:
    def test_default_uses_log_notifier(self):
        scheduler = NotificationScheduler.from_config(NotificationConfig())
        assert isinstance(scheduler.notifier, LogNotifier)
        assert scheduler.title == "Previsão do tempo para amanhã"

    def test_webhook(self):
        scheduler = NotificationScheduler.from_config(
            NotificationConfig(webhook_url=WEBHOOK, enabled=False)
        )
        assert isinstance(scheduler.notifier, WebhookNotifier)
        assert scheduler.enabled is False


class TestWebhookNotifier:
    @respx.mock
    def test_posts_json(self):
        route = respx.post(WEBHOOK).mock(return_value=httpx.Response(204))
        asyncio.run(WebhookNotifier(WEBHOOK).send("Título", "Mensagem"))
        assert route.called
        body = json.loads(route.calls[0].request.content)
        assert body == {"title": "Título", "message": "Mensagem"}

    @respx.mock
    def test_error_status_raises(self):
        respx.post(WEBHOOK).mock(return_value=httpx.Response(500))
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(WebhookNotifier(WEBHOOK).send("t", "m"))

    def test_requires_url(self):
        with pytest.raises(ValueError):
            WebhookNotifier("")


class TestLogNotifier:
    def test_logs_reminder(self, caplog):
        with caplog.at_level(logging.INFO):
            asyncio.run(LogNotifier().send("Título", "Mensagem"))
        assert "Mensagem" in caplog.text
