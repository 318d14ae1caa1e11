"""
Telegram Channel Module.

Feeds Telegram updates into a Dispatcher and sends the outcome back to
the chat as plain text.

Groups and supergroups map to guilds. Administrator rights become
permission names (``can_restrict_members`` -> ``restrict_members``),
the chat owner holds all of them, and plain members hold none.
"""

import asyncio
import re
import time
from typing import Any, Iterable, Optional

from loguru import logger
from telegram import Bot, ChatMember, Update
from telegram.constants import ChatMemberStatus, ChatType
from telegram.error import TelegramError
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from chatcmd.context import ChatMessage, InvocationContext
from chatcmd.dispatch.dispatcher import Dispatcher
from chatcmd.outcomes import Outcome
from chatcmd.parsing.prefix import resolve_prefix
from chatcmd.parsing.types import Snowflake

tg_log = logger.bind(module="TelegramHandler")

ADMIN_RIGHTS = (
    "can_manage_chat",
    "can_delete_messages",
    "can_manage_video_chats",
    "can_restrict_members",
    "can_promote_members",
    "can_change_info",
    "can_invite_users",
    "can_post_messages",
    "can_edit_messages",
    "can_pin_messages",
    "can_manage_topics",
)
ALL_PERMISSIONS = frozenset(right.removeprefix("can_") for right in ADMIN_RIGHTS)

# Seconds a chat's administrator list is reused before fetching it again
ADMIN_CACHE_TTL = 300.0

# User ids are positive, group and channel ids negative
TELEGRAM_ID_PATTERN = re.compile(r"-?[1-9][0-9]{4,15}", re.ASCII)


def member_permissions(member: ChatMember) -> frozenset[str]:
    """
    Permission names held by a chat member.

    Args:
        member: ChatMember from getChatAdministrators / getChatMember

    Returns:
        Every permission for the owner, granted rights for administrators,
        nothing for anyone else
    """
    if member.status == ChatMemberStatus.OWNER:
        return ALL_PERMISSIONS
    if member.status != ChatMemberStatus.ADMINISTRATOR:
        return frozenset()
    return frozenset(
        right.removeprefix("can_") for right in ADMIN_RIGHTS if getattr(member, right, False)
    )


def parse_telegram_id(ctx: Optional[InvocationContext], token: str) -> Optional[Snowflake]:
    """
    Parse a numeric Telegram user or chat id.

    Use as the dispatcher's id parser (``DispatcherBuilder.set_id_parser``)
    so snowflake and entity arguments accept Telegram ids.

    Examples:
        >>> parse_telegram_id(None, "123456789")
        Snowflake(id=123456789, mention_type=None)
        >>> parse_telegram_id(None, "-1001234567890").id
        -1001234567890
        >>> parse_telegram_id(None, "@someone") is None
        True
    """
    if not TELEGRAM_ID_PATTERN.fullmatch(token):
        return None
    return Snowflake(int(token))


def strip_bot_username(text: str, bot_username: Optional[str]) -> str:
    """
    Remove the ``@botname`` suffix Telegram appends to commands in groups.

    A bare ``@botname`` mention is left alone.

    Examples:
        >>> strip_bot_username("/ping@my_bot now", "my_bot")
        '/ping now'
        >>> strip_bot_username("@my_bot ping", "my_bot")
        '@my_bot ping'
    """
    if not bot_username:
        return text
    head, sep, tail = text.partition(" ")
    suffix = f"@{bot_username}"
    if head.endswith(suffix) and len(head) > len(suffix):
        head = head[: -len(suffix)]
    return f"{head}{sep}{tail}"


def to_chat_message(
    update: Update,
    bot_id: Optional[int] = None,
    bot_username: Optional[str] = None,
    author_permissions: Iterable[str] = (),
    bot_permissions: Iterable[str] = (),
    nsfw_chat: bool = False,
) -> Optional[ChatMessage]:
    """
    Convert a Telegram update into a ChatMessage.

    Groups and channels map to guilds; private chats have no guild.

    Args:
        update: Telegram Update object
        bot_id: The bot's own user id
        bot_username: The bot's username, stripped from ``/cmd@bot`` and
            accepted as an ``@bot`` mention prefix
        author_permissions: Permission names the sender holds in the chat
        bot_permissions: Permission names the bot holds in the chat
        nsfw_chat: Whether the chat allows nsfw commands

    Returns:
        ChatMessage, or None if the update carries no text message
    """
    message = update.effective_message
    if message is None or not message.text:
        return None

    chat = message.chat
    user = message.from_user
    is_private = chat.type == ChatType.PRIVATE

    return ChatMessage(
        content=strip_bot_username(message.text, bot_username),
        author_id=user.id if user else chat.id,
        channel_id=chat.id,
        guild_id=None if is_private else chat.id,
        author_is_bot=bool(user and user.is_bot),
        nsfw_channel=nsfw_chat,
        author_permissions=frozenset(author_permissions),
        bot_permissions=frozenset(bot_permissions),
        self_id=bot_id,
        self_mentions=(f"@{bot_username} ",) if bot_username else (),
        raw=update,
    )


def reply_text(outcome: Outcome) -> str:
    """Text to send back for an outcome; empty means stay silent."""
    return outcome.describe()


class ChatAdminCache:
    """Per-chat administrator permissions, refreshed after a TTL."""

    def __init__(self, bot: Bot, ttl: float = ADMIN_CACHE_TTL, clock: Any = time.monotonic):
        """
        Initialize cache.

        Args:
            bot: Bot used to fetch administrator lists
            ttl: Seconds a fetched list stays valid
            clock: Time source in seconds
        """
        self._bot = bot
        self._ttl = ttl
        self._clock = clock
        self._chats: dict[int, tuple[float, dict[int, frozenset[str]]]] = {}

    async def admins(self, chat_id: int) -> dict[int, frozenset[str]]:
        """
        Get user id -> permissions for a chat's administrators.

        A failed fetch is logged and treated as "no administrators";
        it is not cached.
        """
        cached = self._chats.get(chat_id)
        now = self._clock()
        if cached is not None and now < cached[0]:
            return cached[1]

        try:
            members = await self._bot.get_chat_administrators(chat_id=chat_id)
        except TelegramError as e:
            tg_log.warning(f"Could not fetch administrators of {chat_id}: {e}")
            return {}

        admins = {member.user.id: member_permissions(member) for member in members}
        self._chats[chat_id] = (now + self._ttl, admins)
        return admins

    async def permissions(self, chat_id: int, user_id: Optional[int]) -> frozenset[str]:
        """Permission names of one user in a chat."""
        if user_id is None:
            return frozenset()
        return (await self.admins(chat_id)).get(user_id, frozenset())

    def invalidate(self, chat_id: Optional[int] = None) -> None:
        """Forget one chat, or every chat."""
        if chat_id is None:
            self._chats.clear()
        else:
            self._chats.pop(chat_id, None)


class TelegramHandler:
    """Routes Telegram updates through the dispatcher."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        bot: Bot,
        bot_id: Optional[int] = None,
        bot_username: Optional[str] = None,
        admin_cache: Optional[ChatAdminCache] = None,
        nsfw_chat_ids: Iterable[int] = (),
    ):
        """
        Initialize handler.

        Args:
            dispatcher: Dispatcher to route messages through
            bot: Bot used to send replies
            bot_id: The bot's own user id
            bot_username: The bot's username
            admin_cache: Source of group permissions (built from bot by default)
            nsfw_chat_ids: Chats where nsfw commands are allowed
        """
        self._dispatcher = dispatcher
        self._bot = bot
        self._bot_id = bot_id
        self._bot_username = bot_username
        self._admins = admin_cache or ChatAdminCache(bot)
        self._nsfw_chat_ids = frozenset(nsfw_chat_ids)

    def _has_prefix(self, message: ChatMessage) -> bool:
        try:
            prefixes = self._dispatcher.prefix_provider.provide(message)
        except Exception as e:
            tg_log.error(f"Prefix provider failed: {e}")
            return False
        return resolve_prefix(message.content, prefixes) is not None

    async def build_message(self, update: Update) -> Optional[ChatMessage]:
        """
        Convert an update, filling in group permissions for commands.

        Administrator lists are only fetched for group messages that
        start with a prefix.
        """
        message = to_chat_message(
            update,
            self._bot_id,
            self._bot_username,
            nsfw_chat=self._is_nsfw(update),
        )
        if message is None or message.guild_id is None or not self._has_prefix(message):
            return message

        author_permissions = await self._admins.permissions(message.channel_id, message.author_id)
        bot_permissions = await self._admins.permissions(message.channel_id, self._bot_id)
        return message.model_copy(
            update={"author_permissions": author_permissions, "bot_permissions": bot_permissions}
        )

    def _is_nsfw(self, update: Update) -> bool:
        message = update.effective_message
        return message is not None and message.chat.id in self._nsfw_chat_ids

    async def handle_update(self, update: Update) -> bool:
        """
        Handle an incoming Telegram update.

        Args:
            update: Telegram Update object

        Returns:
            True if the update was a command invocation
        """
        message = await self.build_message(update)
        if message is None:
            tg_log.debug("Update has no text message, skipping")
            return False

        future = self._dispatcher.dispatch(message)
        if future is None:
            return False

        outcome = await asyncio.wrap_future(future)
        text = reply_text(outcome)
        if text:
            try:
                await self._bot.send_message(chat_id=message.channel_id, text=text)
            except Exception as e:
                tg_log.error(f"Failed to send reply to {message.channel_id}: {e}")
        return True

    async def _on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self.handle_update(update)

    def attach(self, application: Application) -> None:
        """Register this handler for text messages on an Application."""
        application.add_handler(MessageHandler(filters.TEXT, self._on_message))
        tg_log.info("Telegram handler attached")
