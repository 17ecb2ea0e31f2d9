from typing import Mapping, Sequence

from games.resolver import RoundResult
from games.roulette import Bet, BetTarget, pocket_color
from ui.keyboards import COLOR_EMOJI


def number_badge(n: int) -> str:
    return f"{n} {COLOR_EMOJI[pocket_color(n).value]}"


def pretty_bet_line(bet: Bet) -> str:
    return f"• {bet.target.label}: {bet.stake}"


def summarize_bets(bets: Mapping[BetTarget, Bet]) -> str:
    if not bets:
        return "No bets placed."
    lines = [pretty_bet_line(b) for b in bets.values()]
    total = sum(b.stake for b in bets.values())
    return "Your Bets:\n" + "\n".join(lines) + f"\n— Total bet: {total}"


def format_history(history: Sequence[int]) -> str:
    if not history:
        return "No spins yet."
    return " · ".join(number_badge(n) for n in history)


def build_table_text(balance: int, chip: int, bets: Mapping[BetTarget, Bet], history: Sequence[int]) -> str:
    return (
        "🎡 <b>Roulette</b>\n"
        f"💰 Balance: {balance}\n"
        f"🪙 Current Chip: {chip}\n"
        f"🕘 Last: {format_history(history)}\n\n"
        f"{summarize_bets(bets)}"
    )


def build_spin_frame(n: int, step: int, total: int) -> str:
    return f"🎡 Spinning...\nRoll: {number_badge(n)} (step {step}/{total})"


def build_result_text(result: RoundResult) -> str:
    lines = [
        "🎡 <b>Roulette Result</b>",
        f"Number {result.drawn} ({result.color.value.upper()})!",
        "",
    ]
    for target, bet in result.bets.items():
        won = result.per_bet_winnings[target]
        mark = f"✅ +{won}" if won else "❌"
        lines.append(f"{pretty_bet_line(bet)} {mark}")
    lines.append("")
    winners = result.winning_bets
    if winners:
        lines.append("Winning spots: " + ", ".join(target.label for target in winners))
    lines.append(f"Total Bet: {result.total_staked}")
    if result.total_winnings:
        lines.append(f"Won: {result.total_winnings}")
        if result.net_result > 0:
            lines.append(f"Net win: {result.net_result}")
        else:
            lines.append(f"Net loss: {abs(result.net_result)}")
    else:
        lines.append(f"Lost: {result.total_staked}")
    lines.append(f"💰 Balance: {result.new_balance}")
    return "\n".join(lines)


def build_game_over_text() -> str:
    return "💸 <b>Game Over!</b> You are out of money.\nRestart to play again."
