"""TelegramClient — event-driven scan surface via python-telegram-bot."""
import logging
import time
from typing import Callable, Optional

from telegram import Bot, Update
from telegram.constants import ChatAction
from telegram.ext import Application, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from agriscan.bot_client import BotClient, OnImage
from agriscan.config import Config
from agriscan.constants import (
    CMD_HELP,
    CMD_START,
    CMD_STATUS,
    MSG_ERR_DOWNLOAD,
    MSG_ERR_UNSUPPORTED_MEDIA,
    MSG_HELP,
    MSG_SCAN_DONE,
    MSG_SCAN_STALE,
    MSG_SCAN_START,
    MSG_SEND_FAIL,
    MSG_SEND_PHOTO_HINT,
    PHOTO_MIME_TYPE,
)
from agriscan.diagnosis import ImageInput, describe
from agriscan.report import render_outcome
from agriscan.sequencer import ScanSequencer
from agriscan.telegram.indicator import TelegramActionIndicator

logger = logging.getLogger(__name__)

IMAGE_FILTER = filters.PHOTO | filters.Document.IMAGE
OTHER_DOCUMENT_FILTER = filters.Document.ALL & ~filters.Document.IMAGE
TEXT_FILTER = filters.TEXT & ~filters.COMMAND


class TelegramClient(BotClient):

    def __init__(self, config: Config, sequencer: Optional[ScanSequencer] = None) -> None:
        self._token = config.telegram_bot_token
        self._credential_env = config.credential_env_for(config.vision_provider)
        self._sequencer = sequencer or ScanSequencer()
        self._app: Optional[Application] = None

    # ── BotClient interface ───────────────────────────────────────────────────

    def run(
        self,
        on_image: OnImage,
        on_status: Callable[[], str] | None = None,
    ) -> None:
        self._app = Application.builder().token(self._token).concurrent_updates(True).build()
        self._app.add_handler(CommandHandler([CMD_START, CMD_HELP], self._make_reply_handler(MSG_HELP)))
        if on_status is not None:
            self._app.add_handler(
                CommandHandler(CMD_STATUS, self._make_simple_handler(on_status))
            )
        self._app.add_handler(
            TGMessageHandler(IMAGE_FILTER, self._make_image_handler(on_image))
        )
        self._app.add_handler(
            TGMessageHandler(OTHER_DOCUMENT_FILTER, self._make_reply_handler(MSG_ERR_UNSUPPORTED_MEDIA))
        )
        self._app.add_handler(
            TGMessageHandler(TEXT_FILTER, self._make_reply_handler(MSG_SEND_PHOTO_HINT))
        )
        self._app.run_polling()

    async def send_message(self, to: str, text: str) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case app:
                try:
                    await app.bot.send_message(chat_id=int(to), text=text)
                    return True
                except Exception as exc:
                    logger.error("Telegram send_message failed: %s", exc)
                    return False

    # ── helpers (also used in tests) ─────────────────────────────────────────

    @staticmethod
    def _chat_id(update: Update) -> str:
        return str(update.effective_chat.id) if update.effective_chat else ""

    @staticmethod
    async def _download_image(update: Update) -> Optional[ImageInput]:
        """Photo → largest size as JPEG; document → its declared MIME type."""
        msg = update.message
        match (msg.photo if msg else None, msg.document if msg else None):
            case ([*_, largest], _):
                tg_file = await largest.get_file()
                mime_type = PHOTO_MIME_TYPE
            case (_, None):
                return None
            case (_, document):
                tg_file = await document.get_file()
                mime_type = document.mime_type or ""
        data = bytes(await tg_file.download_as_bytearray())
        return ImageInput(data=data, mime_type=mime_type)

    # ── internal handler factory ──────────────────────────────────────────────

    def _make_simple_handler(self, callback: Callable[[], str]) -> Callable:
        """Handler for commands that need no arguments — just call callback and reply."""
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            await self.send_message(self._chat_id(update), callback())

        return _handler

    def _make_reply_handler(self, text: str) -> Callable:
        """Handler that answers any matching update with a fixed text."""
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            await self.send_message(self._chat_id(update), text)

        return _handler

    def _make_image_handler(self, on_image: OnImage) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            sender = self._chat_id(update)
            try:
                image = await self._download_image(update)
            except Exception:
                logger.exception("Image download failed")
                await self.send_message(sender, MSG_ERR_DOWNLOAD)
                return
            await self._scan(sender, image, context.bot, on_image)

        return _handler

    async def _scan(
        self,
        sender: str,
        image: Optional[ImageInput],
        bot: Bot,
        on_image: OnImage,
    ) -> None:
        seq = self._sequencer.begin(sender)
        logger.info(MSG_SCAN_START, seq, sender, image.mime_type if image else "no image")
        start = time.time()
        indicator = TelegramActionIndicator(bot, sender, ChatAction.TYPING)
        await indicator.start()
        try:
            outcome = await on_image(image)
        finally:
            await indicator.stop()

        elapsed = time.time() - start
        logger.info(MSG_SCAN_DONE, seq, describe(outcome), elapsed)
        match self._sequencer.is_current(sender, seq):
            case False:
                logger.info(MSG_SCAN_STALE, seq, sender)
                return
            case True:
                pass

        match await self.send_message(sender, render_outcome(outcome, self._credential_env)):
            case True:
                pass
            case False:
                logger.error(MSG_SEND_FAIL, elapsed)
