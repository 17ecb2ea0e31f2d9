import asyncio
import logging
from dataclasses import dataclass
from typing import Tuple

from aiogram import Bot, Dispatcher, F, Router
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from config import Settings, get_settings
from games.roulette import InvalidTarget, target_from_key
from games.session import GameSession, SessionState
from services.rng import make_rng
from ui.keyboards import (
    game_over_kb,
    roulette_numbers_kb,
    roulette_result_kb,
    roulette_table_kb,
)
from ui.texts import (
    build_game_over_text,
    build_result_text,
    build_spin_frame,
    build_table_text,
    format_history,
)

logger = logging.getLogger(__name__)
router = Router()


@dataclass
class TableView:
    """The single game session this process serves plus the chip the player holds."""
    session: GameSession
    chips: Tuple[int, ...]
    chip: int
    frame_delay: float = 0.0


def build_table(settings: Settings) -> TableView:
    session = GameSession(
        starting_balance=settings.starting_balance,
        rng=make_rng(settings.rng_seed),
        history_size=settings.history_size,
        spin_frames=settings.spin_frames,
    )
    return TableView(
        session=session,
        chips=settings.chips,
        chip=settings.default_chip,
        frame_delay=settings.spin_frame_delay,
    )


# ---------- safe_edit helper (prevents 'message is not modified') ----------
async def safe_edit(message, text: str, **kwargs):
    """
    Edit only if content or markup differ. Swallows the specific
    'message is not modified' TelegramBadRequest.
    """
    if getattr(message, "text", None) == text and getattr(message, "reply_markup", None) == kwargs.get("reply_markup"):
        return
    try:
        await message.edit_text(text, **kwargs)
    except TelegramBadRequest as e:
        if "message is not modified" not in str(e):
            raise


def table_screen(table: TableView):
    session = table.session
    if session.is_game_over:
        return build_game_over_text(), game_over_kb()
    text = build_table_text(session.get_balance(), table.chip, session.bets, session.get_history())
    kb = roulette_table_kb(table.chips, table.chip, session.bets, can_spin=session.total_staked() > 0)
    return text, kb


async def _render_table(cb: CallbackQuery, table: TableView):
    text, kb = table_screen(table)
    await safe_edit(cb.message, text, reply_markup=kb, parse_mode=ParseMode.HTML)


# =========================================================
# Commands
# =========================================================

@router.message(Command("start"))
async def cmd_start(msg: Message, table: TableView):
    text, kb = table_screen(table)
    await msg.answer(text, reply_markup=kb, parse_mode=ParseMode.HTML)


@router.message(Command("balance"))
async def cmd_balance(msg: Message, table: TableView):
    session = table.session
    await msg.answer(f"💰 Balance: {session.get_balance()} (on the table: {session.total_staked()})")


@router.message(Command("history"))
async def cmd_history(msg: Message, table: TableView):
    await msg.answer(f"🕘 Last numbers: {format_history(table.session.get_history())}")


@router.message(Command("restart"))
async def cmd_restart(msg: Message, table: TableView):
    reset = table.session.reset()
    if not reset.ok:
        return await msg.answer(str(reset.error))
    text, kb = table_screen(table)
    await msg.answer(text, reply_markup=kb, parse_mode=ParseMode.HTML)


# =========================================================
# Roulette table
# =========================================================

async def _spin(cb: CallbackQuery, table: TableView):
    session = table.session
    planned = session.begin_spin()
    if not planned.ok:
        return await cb.answer(str(planned.error), show_alert=True)
    plan = planned.value
    await cb.answer("No more bets!")
    for i, n in enumerate(plan.frames, start=1):
        await safe_edit(cb.message, build_spin_frame(n, i, len(plan.frames)), parse_mode=ParseMode.HTML)
        await asyncio.sleep(table.frame_delay)
    completed = session.complete_spin()
    if not completed.ok:
        logger.error("Spin for %d could not be settled: %s", plan.drawn, completed.error)
        return await _render_table(cb, table)
    result = completed.value
    kb = game_over_kb() if session.is_game_over else roulette_result_kb()
    await safe_edit(cb.message, build_result_text(result), reply_markup=kb, parse_mode=ParseMode.HTML)


@router.callback_query(F.data.startswith("roul:"))
async def roulette_actions(cb: CallbackQuery, table: TableView):
    data = cb.data.split(":")
    action = data[1]
    session = table.session

    if action == "noop":
        return await cb.answer("Add bets first.")

    if action in ("chip", "numbers", "back") and session.state is SessionState.RESOLVING:
        return await cb.answer("The wheel is spinning; bets are closed.", show_alert=True)

    if action == "chip":
        try:
            chip = int(data[2])
        except (IndexError, ValueError):
            return await cb.answer("Unknown chip.", show_alert=True)
        if chip not in table.chips:
            return await cb.answer("Unknown chip.", show_alert=True)
        table.chip = chip
        await _render_table(cb, table)
        return await cb.answer(f"Chip {chip}")

    if action == "bet":
        try:
            target = target_from_key(data[2])
        except (IndexError, InvalidTarget) as e:
            logger.warning("Bad bet callback %r: %s", cb.data, e)
            return await cb.answer("Unknown bet spot.", show_alert=True)
        placed = session.place_bet(target, table.chip)
        if not placed.ok:
            return await cb.answer(str(placed.error), show_alert=True)
        await _render_table(cb, table)
        return await cb.answer(f"{placed.value.target.label}: {placed.value.stake}")

    if action == "numbers":
        if session.is_game_over:
            return await cb.answer("Game Over! You are out of money.", show_alert=True)
        await safe_edit(cb.message, "🎯 Select a number:", reply_markup=roulette_numbers_kb(session.bets))
        return await cb.answer()

    if action == "back":
        await _render_table(cb, table)
        return await cb.answer()

    if action == "clear":
        cleared = session.clear_bets()
        if not cleared.ok:
            return await cb.answer(str(cleared.error), show_alert=True)
        await _render_table(cb, table)
        return await cb.answer("Cleared.")

    if action == "spin":
        return await _spin(cb, table)

    if action == "restart":
        reset = session.reset()
        if not reset.ok:
            return await cb.answer(str(reset.error), show_alert=True)
        await _render_table(cb, table)
        return await cb.answer("New game.")

    await cb.answer()


# =========================================================
# Entrypoint
# =========================================================

async def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    bot = Bot(token=settings.require_token(), default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()
    dp["table"] = build_table(settings)
    dp.include_router(router)
    logger.info("Roulette table open with balance %d", settings.starting_balance)
    await dp.start_polling(bot)


if __name__ == "__main__":
    asyncio.run(main())
