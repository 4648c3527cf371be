import logging
from unittest.mock import AsyncMock

import pytest

from mautrix.errors import MatrixError
from mautrix.types import MessageType, Format

from jenkins_matrix.publisher import MatrixPublisher
from jenkins_matrix.types import Color, MessageFormat


class FakeBot:
    def __init__(self, **config) -> None:
        self.config = {
            "send_as_notice": True,
            "default_room": "",
            "color_circles": False,
            **config,
        }
        self.client = AsyncMock()
        self.log = logging.getLogger("jenkins_matrix.test")


def _sent_content(bot: FakeBot):
    bot.client.send_message.assert_awaited_once()
    room_id, content = bot.client.send_message.await_args.args
    return room_id, content


def test_resolve_job_room() -> None:
    bot = FakeBot(default_room="!default:example.com")
    assert MatrixPublisher(bot).resolve_service("!job:example.com").room_id == "!job:example.com"


def test_resolve_default_room() -> None:
    bot = FakeBot(default_room="!default:example.com")
    assert MatrixPublisher(bot).resolve_service("").room_id == "!default:example.com"
    assert MatrixPublisher(bot).resolve_service(None).room_id == "!default:example.com"


@pytest.mark.asyncio
async def test_publish_without_any_room_is_dropped() -> None:
    bot = FakeBot()
    await MatrixPublisher(bot).resolve_service("").publish("hi", Color.GREEN)
    bot.client.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_publish_html() -> None:
    bot = FakeBot()
    message = "App - #1 failed (<a href='https://ci.example.com/job/app/1/'>Open</a>)"
    await MatrixPublisher(bot).resolve_service("!job:example.com").publish(
        message, Color.RED, MessageFormat.HTML)

    room_id, content = _sent_content(bot)
    assert room_id == "!job:example.com"
    assert content.msgtype == MessageType.NOTICE
    assert content.format == Format.HTML
    assert content.formatted_body == message
    assert "<a href" not in content.body
    assert "App - #1 failed" in content.body
    assert content["xyz.maubot.jenkins"] == {"color": "red"}


@pytest.mark.asyncio
async def test_publish_text_with_color_circle() -> None:
    bot = FakeBot(send_as_notice=False, color_circles=True)
    await MatrixPublisher(bot).resolve_service("!job:example.com").publish(
        "All good", Color.GREEN)

    _, content = _sent_content(bot)
    assert content.msgtype == MessageType.TEXT
    assert content.body == "🟢 All good"
    assert content.formatted_body is None


@pytest.mark.asyncio
async def test_transport_failure_is_logged(caplog) -> None:
    bot = FakeBot()
    bot.client.send_message.side_effect = MatrixError("room not found")
    with caplog.at_level(logging.WARNING):
        await MatrixPublisher(bot).resolve_service("!job:example.com").publish(
            "hi", Color.RED, MessageFormat.HTML)
    assert "Failed to publish notification" in caplog.text
