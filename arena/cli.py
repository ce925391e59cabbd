import argparse

from engine.core.constants import ROWS, COLS, SIDE_1, SIDE_2
from arena.app.core.preset_registry import registry
from arena.app.core.settings import configure_logging, settings
from arena.app.game.match import Match
from arena.app.game.players import ComputerPlayer, ConsolePlayer, Player
from arena.app.models.enums import GameStatus, PlayerType


def build_player(spec: str, side: int) -> Player:
    """'human', 'computer' (default depth), a preset name, or a lookahead depth."""
    if spec == PlayerType.HUMAN:
        return ConsolePlayer(side)
    if spec == PlayerType.COMPUTER:
        return ComputerPlayer(side=side, depth=settings.default_depth, limits=settings.search_limits())
    if registry.get(spec) is not None:
        return registry.build_player(spec, side)
    try:
        depth = int(spec)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Player must be 'human', 'computer', a preset ({', '.join(registry.list_all())}) or a depth, got {spec!r}"
        )
    return ComputerPlayer(side=side, depth=depth, limits=settings.search_limits())


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Connect Four against the minimax engine.")
    parser.add_argument("--player1", default=PlayerType.HUMAN.value,
                        help="'human', 'computer', a preset name or a lookahead depth (moves first)")
    parser.add_argument("--player2", default=str(settings.default_depth),
                        help="'human', 'computer', a preset name or a lookahead depth")
    parser.add_argument("--rows", type=int, default=ROWS)
    parser.add_argument("--columns", type=int, default=COLS)
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        player_1 = build_player(args.player1, SIDE_1)
        player_2 = build_player(args.player2, SIDE_2)
    except (argparse.ArgumentTypeError, ValueError) as e:
        print(f"Error: {e}")
        return 2

    print("=======================================")
    print(f"   CONNECT FOUR: {player_1!r} vs {player_2!r}")
    print("=======================================")

    match = Match(player_1, player_2, rows=args.rows, columns=args.columns)
    print(match.board.render())

    while match.status == GameStatus.IN_PROGRESS:
        move = match.play_turn()
        print(f"\nSide {move['side']} plays Column: {move['column']}")
        print(match.board.render())

    # --- End Game ---
    if match.winner is not None:
        symbol = "X" if match.winner == SIDE_1 else "O"
        print(f"\nGame Over! Winner: Side {match.winner} ({symbol}), {', '.join(sorted(match.alignment))}")
    else:
        print("\nGame Over! It's a Draw.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
