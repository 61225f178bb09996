"""Routes incoming chat messages to registration or report commands."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from treasury_bot.schemas.telegram import TelegramUpdate
from treasury_bot.services.access import AccessGate, RegistrationOutcome
from treasury_bot.services.telegram.client import TelegramAPIError, TelegramClient
from treasury_bot.services.telegram.formatter import HELP_TEXT, ReportFormatter, escape_markdown
from treasury_bot.services.treasury import TreasuryReportService

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "⚠️ No estás autorizado. Usá /start para registrarte."
CUIT_USAGE = "⚠️ Debés indicar el CUIT. Ejemplo: /cuit 20123456789"


@dataclass
class Reply:
    """A message to send back to the chat that wrote to us."""

    chat_id: int
    text: str
    parse_mode: str | None = "Markdown"


class CommandDispatcher:
    """Maps one Telegram update to at most one reply.

    Commands other than /start and bare /cuit require an authorized chat.
    Plain text containing "@" from an unregistered chat is treated as a
    registration attempt; other plain text is ignored.
    """

    def __init__(
        self,
        gate: AccessGate,
        reports: TreasuryReportService,
        formatter: ReportFormatter,
    ) -> None:
        self._gate = gate
        self._reports = reports
        self._formatter = formatter
        self._commands: dict[str, Callable[[str], str]] = {
            "/ayuda": lambda _: HELP_TEXT,
            "/cartera": lambda _: formatter.render(reports.portfolio()),
            "/hoy": lambda _: formatter.render(reports.due_today()),
            "/manana": lambda _: formatter.render(reports.due_tomorrow()),
            "/semana": lambda _: formatter.render(reports.due_this_week()),
            "/saldos": lambda _: formatter.render(reports.balances()),
            "/alertas": lambda _: formatter.render(reports.alerts()),
            "/cuit": lambda arg: formatter.render(reports.cuit_lookup(arg)),
            "/resumen": lambda _: formatter.render(reports.executive_summary()),
        }

    def handle(self, update: TelegramUpdate) -> Reply | None:
        message = update.message
        if message is None or not message.text:
            return None

        chat_id = message.chat.id
        text = message.text.strip()
        self._gate.touch(chat_id)

        if not text.startswith("/"):
            return self._handle_text(chat_id, text)

        command, _, argument = text.partition(" ")
        command = command.split("@", 1)[0].lower()
        argument = argument.strip()

        if command == "/start":
            return self._start(chat_id)
        if command == "/cuit" and not argument:
            return Reply(chat_id, CUIT_USAGE)

        handler = self._commands.get(command)
        if handler is None:
            logger.debug("Ignoring unknown command %s from chat %s", command, chat_id)
            return None
        if not self._gate.is_authorized(chat_id):
            return Reply(chat_id, NOT_AUTHORIZED)

        logger.info("Chat %s requested %s", chat_id, command)
        return Reply(chat_id, handler(argument))

    def _start(self, chat_id: int) -> Reply:
        user = self._gate.user_for(chat_id)
        if user is not None:
            return Reply(
                chat_id,
                f"✅ Ya estás registrado como {escape_markdown(user.email)}.\n\n"
                "Usá /ayuda para ver los comandos disponibles.",
            )
        return Reply(
            chat_id,
            "🏦 *Bot de Tesorería - Grande State*\n\n"
            "Para usar este bot necesitás estar autorizado.\n\n"
            "Por favor, ingresá tu email corporativo:",
        )

    def _handle_text(self, chat_id: int, text: str) -> Reply | None:
        if self._gate.is_authorized(chat_id):
            return None

        result = self._gate.register(chat_id, text)
        if result.outcome == RegistrationOutcome.REJECTED:
            return Reply(
                chat_id,
                "❌ Email no autorizado.\n\n"
                f"El email {escape_markdown(result.email or '')} no está en la lista "
                "de usuarios permitidos.\n\n"
                "Contactá al administrador.",
            )
        if result.outcome == RegistrationOutcome.REGISTERED:
            return Reply(
                chat_id,
                "✅ *¡Registro exitoso!*\n\n"
                "Bienvenido/a al Bot de Tesorería.\n"
                f"Email: {escape_markdown(result.user.email)}\n"
                f"Rol: {escape_markdown(result.user.role or '-')}\n\n"
                "Usá /ayuda para ver los comandos disponibles.",
            )
        return None


def send_reply(client: TelegramClient, gate: AccessGate, reply: Reply) -> bool:
    """Send a reply; a chat that blocked the bot is revoked. Returns delivery success."""
    try:
        client.send_message(reply.chat_id, reply.text, parse_mode=reply.parse_mode)
    except TelegramAPIError as e:
        logger.error("Error replying to chat %s: %s", reply.chat_id, e)
        if e.is_recipient_unreachable:
            gate.revoke(reply.chat_id)
        return False
    return True
