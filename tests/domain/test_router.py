"""End-to-end tests for EventRouter: message pipeline and guild reconciliation."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from ytdlp_discord.domain.dispatcher import DownloadDispatcher
from ytdlp_discord.domain.models import AuthorizationPolicy, DownloadOutcome
from ytdlp_discord.domain.replies import ACK_TEXT, INVALID_URL_TEXT
from ytdlp_discord.domain.router import EventRouter
from ytdlp_discord.ports.inbound import IncomingMessage, JoinedGuild

CHANNEL = 100
GUILD = 1


def _msg(content, *, guild_id=GUILD, channel_id=CHANNEL, is_bot=False):
    return IncomingMessage(
        content=content,
        channel_id=channel_id,
        author_id=42,
        is_bot=is_bot,
        guild_id=guild_id,
    )


def _make_router(tmp_path, policy=None, outcome=None):
    chat = AsyncMock()
    downloader = MagicMock()
    downloader.download = AsyncMock(return_value=outcome or DownloadOutcome.ok())
    dispatcher = DownloadDispatcher(
        chat=chat, downloader=downloader, output_dir=str(tmp_path),
    )
    router = EventRouter(
        policy=policy or AuthorizationPolicy(guild_ids=frozenset({GUILD})),
        chat=chat,
        dispatcher=dispatcher,
    )
    return router, chat, downloader


async def _drain(router):
    await asyncio.gather(*router.dispatcher.in_flight)


def _sent_texts(chat):
    return [call.args[1] for call in chat.send.await_args_list]


# ---------------------------------------------------------------------------
# Message pipeline
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_valid_url_acknowledges_then_reports_success(tmp_path):
    router, chat, downloader = _make_router(tmp_path)

    await router.on_message(_msg("check this out http://example.com/video"))
    await _drain(router)

    assert _sent_texts(chat) == [ACK_TEXT, "Downloaded: <http://example.com/video>"]
    downloader.download.assert_awaited_once()
    assert downloader.download.await_args.args[0].url == "http://example.com/video"


@pytest.mark.asyncio
async def test_valid_url_reports_failure(tmp_path):
    router, chat, _ = _make_router(
        tmp_path, outcome=DownloadOutcome.failed("yt-dlp failed with exit status 1"),
    )

    await router.on_message(_msg("check this out http://example.com/video"))
    await _drain(router)

    texts = _sent_texts(chat)
    assert texts[0] == ACK_TEXT
    assert texts[1] == (
        "Failed to download http://example.com/video: yt-dlp failed with exit status 1"
    )
    assert len(texts) == 2


@pytest.mark.asyncio
async def test_no_url_replies_invalid_once(tmp_path):
    router, chat, downloader = _make_router(tmp_path)

    await router.on_message(_msg("hello there"))

    chat.send.assert_awaited_once_with(CHANNEL, INVALID_URL_TEXT)
    downloader.download.assert_not_awaited()
    assert router.dispatcher.in_flight == frozenset()


@pytest.mark.asyncio
async def test_malformed_url_replies_invalid(tmp_path):
    router, chat, downloader = _make_router(tmp_path)

    await router.on_message(_msg("grab http://bad_host now"))

    chat.send.assert_awaited_once_with(CHANNEL, INVALID_URL_TEXT)
    downloader.download.assert_not_awaited()


@pytest.mark.asyncio
async def test_invalid_notice_send_failure_is_swallowed(tmp_path):
    router, chat, _ = _make_router(tmp_path)
    chat.send.side_effect = RuntimeError("Missing Permissions")

    await router.on_message(_msg("hello there"))

    chat.send.assert_awaited_once()


@pytest.mark.asyncio
async def test_bot_author_gets_no_reply(tmp_path):
    router, chat, downloader = _make_router(tmp_path)

    await router.on_message(_msg("http://example.com/video", is_bot=True))

    chat.send.assert_not_awaited()
    downloader.download.assert_not_awaited()


@pytest.mark.asyncio
async def test_unlisted_guild_is_silent(tmp_path):
    router, chat, _ = _make_router(tmp_path)

    await router.on_message(_msg("hello there", guild_id=999))

    chat.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_other_channel_is_silent(tmp_path):
    policy = AuthorizationPolicy(guild_ids=frozenset({GUILD}), channel_id=CHANNEL)
    router, chat, _ = _make_router(tmp_path, policy=policy)

    await router.on_message(_msg("http://example.com/video", channel_id=CHANNEL + 1))

    chat.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_direct_message_is_handled(tmp_path):
    router, chat, _ = _make_router(tmp_path)

    await router.on_message(_msg("hello there", guild_id=None))

    chat.send.assert_awaited_once_with(CHANNEL, INVALID_URL_TEXT)


# ---------------------------------------------------------------------------
# Guild reconciliation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_ready_leaves_unlisted_guilds_only(tmp_path):
    router, chat, _ = _make_router(
        tmp_path, policy=AuthorizationPolicy(guild_ids=frozenset({1})),
    )
    guilds = [JoinedGuild(1, "home"), JoinedGuild(2, "spam"), JoinedGuild(3, "other")]

    await router.on_ready("ytdlp-bot", guilds)

    left = [call.args[0] for call in chat.leave_guild.await_args_list]
    assert left == [2, 3]


@pytest.mark.asyncio
async def test_ready_without_allow_list_leaves_nothing(tmp_path):
    router, chat, _ = _make_router(tmp_path, policy=AuthorizationPolicy())

    await router.on_ready("ytdlp-bot", [JoinedGuild(1), JoinedGuild(2)])

    chat.leave_guild.assert_not_awaited()


@pytest.mark.asyncio
async def test_ready_continues_after_failed_departure(tmp_path):
    router, chat, _ = _make_router(
        tmp_path, policy=AuthorizationPolicy(guild_ids=frozenset({1})),
    )
    chat.leave_guild.side_effect = [RuntimeError("HTTP 500"), None]

    await router.on_ready("ytdlp-bot", [JoinedGuild(2), JoinedGuild(1), JoinedGuild(3)])

    left = [call.args[0] for call in chat.leave_guild.await_args_list]
    assert left == [2, 3]


@pytest.mark.asyncio
async def test_guild_join_applies_allow_list(tmp_path):
    router, chat, _ = _make_router(
        tmp_path, policy=AuthorizationPolicy(guild_ids=frozenset({1})),
    )

    await router.on_guild_join(JoinedGuild(1, "home"))
    chat.leave_guild.assert_not_awaited()

    await router.on_guild_join(JoinedGuild(7, "stranger"))
    chat.leave_guild.assert_awaited_once_with(7)
