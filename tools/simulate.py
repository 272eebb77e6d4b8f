import argparse
import random
import sys
import time
from collections import Counter
from typing import Dict, List

sys.path.append('.')
import game  # type: ignore


def autoplay_moves(size: int, games: int, seed: int) -> List[game.GameState]:
    rng = random.Random(seed)
    finals = []
    for _ in range(games):
        s = rng.randrange(1_000_000)
        g = game.MemoryGame(grid_size=size, scheduler=game.ManualScheduler(), seed=s)
        finals.append(game.play_out(g, game.RememberingPlayer(seed=s)))
    return finals


def position_spread(size: int, trials: int, seed: int) -> Dict[int, float]:
    """Per position: max/min ratio of how often each value landed there (1.0 is perfectly even)."""
    rng = random.Random(seed)
    counts: Dict[int, Counter] = {i: Counter() for i in range(size * size)}
    for _ in range(trials):
        for card in game.generate(size, rng=rng):
            counts[card.id][card.value] += 1
    spread = {}
    for pos, ctr in counts.items():
        lo = min(ctr.get(v, 0) for v in range(1, game.pair_count(size) + 1))
        hi = max(ctr.values())
        spread[pos] = hi / lo if lo else float('inf')
    return spread


def main():
    parser = argparse.ArgumentParser(description='Autoplay memory match games and check the shuffle')
    parser.add_argument('--size', type=int, default=4)
    parser.add_argument('--games', type=int, default=200)
    parser.add_argument('--trials', type=int, default=5000, help='Deals used for the shuffle spread check')
    parser.add_argument('--seed', type=int, default=0)
    args = parser.parse_args()

    t0 = time.time()
    finals = autoplay_moves(args.size, args.games, args.seed)
    took = int((time.time() - t0) * 1000)
    won = [f for f in finals if f.won]
    moves = [f.move_count for f in finals]
    print(f"size={args.size} games={args.games} won={len(won)} ({took}ms)")
    print(f"moves min={min(moves)} avg={sum(moves) / len(moves):.2f} max={max(moves)} "
          f"perfect={sum(1 for f in won if f.is_perfect)}")

    spread = position_spread(args.size, args.trials, args.seed)
    worst = max(spread, key=spread.get)
    print(f"shuffle spread over {args.trials} deals: worst position {worst} ratio={spread[worst]:.2f}")


if __name__ == '__main__':
    main()
