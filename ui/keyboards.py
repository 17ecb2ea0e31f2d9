from typing import Mapping, Sequence

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from games.roulette import OUTSIDE_TARGETS, Bet, BetTarget, SingleNumber, pocket_color

SPOT_EMOJI = {
    "red": "🔴",
    "black": "⚫",
    "even": "○",
    "odd": "●",
    "1-18": "⬇",
    "19-36": "⬆",
}
COLOR_EMOJI = {"red": "🔴", "black": "⚫", "green": "🟢"}


def _spot_text(target: BetTarget, bets: Mapping[BetTarget, Bet]) -> str:
    emoji = SPOT_EMOJI.get(target.key)
    text = f"{emoji} {target.label}" if emoji else target.label
    bet = bets.get(target)
    if bet:
        text += f" ({bet.stake})"
    return text


def _chunk_sizes(count: int, width: int) -> list:
    sizes = [width] * (count // width)
    if count % width:
        sizes.append(count % width)
    return sizes


def roulette_table_kb(
    chips: Sequence[int],
    chip: int,
    bets: Mapping[BetTarget, Bet],
    can_spin: bool,
) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for value in chips:
        kb.button(text=f"•{value}•" if value == chip else f"{value}", callback_data=f"roul:chip:{value}")
    for target in OUTSIDE_TARGETS:
        kb.button(text=_spot_text(target, bets), callback_data=f"roul:bet:{target.key}")
    kb.button(text="🎯 Num", callback_data="roul:numbers")
    kb.button(text="🧹 CLR", callback_data="roul:clear")
    kb.button(
        text="🎡 SPIN" if can_spin else "➕ Add bets",
        callback_data="roul:spin" if can_spin else "roul:noop",
    )
    # colours+parity, ranges, dozens, columns, number/clear, spin
    kb.adjust(*_chunk_sizes(len(chips), 4), 4, 2, 3, 3, 2, 1)
    return kb.as_markup()


def roulette_numbers_kb(bets: Mapping[BetTarget, Bet]) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for n in range(37):
        color = pocket_color(n).value
        bet = bets.get(SingleNumber(n))
        text = f"{n} ({bet.stake})" if bet else f"{COLOR_EMOJI[color]}{n}"
        kb.button(text=text, callback_data=f"roul:bet:{n}")
    kb.button(text="⬅️ Back", callback_data="roul:back")
    kb.adjust(1, 6, 6, 6, 6, 6, 6, 1)
    return kb.as_markup()


def roulette_result_kb() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="🎡 New round", callback_data="roul:back")
    return kb.as_markup()


def game_over_kb() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="🔄 Restart Game", callback_data="roul:restart")
    return kb.as_markup()
