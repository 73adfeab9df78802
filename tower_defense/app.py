from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from .config import PATH_LAYOUTS, GameConfig
from .engine import TowerDefenseEngine
from .errors import TowerDefenseError
from .models import EventType, GameEvent, TowerKind, WavePhase
from .scores import HighScoreStore

LogFn = Callable[[str], None]

QUIET_EVENTS = {EventType.PROJECTILE_FIRED, EventType.ENEMY_HIT}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tower Defense")
    parser.add_argument("--layout", choices=sorted(PATH_LAYOUTS), default="classic", help="Path layout to play on")
    parser.add_argument("--seed", type=int, help="Seed for enemy selection")
    parser.add_argument("--nogui", action="store_true", help="Run an automatic game in the console")
    parser.add_argument("--waves", type=int, default=5, help="Waves to play in console mode")
    parser.add_argument("--tick-ms", type=float, default=1000.0 / 60, help="Simulation step in console mode")
    parser.add_argument("--speed", type=float, default=1.0, help="Initial speed multiplier")
    parser.add_argument("--no-save", action="store_true", help="Do not persist the high score")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = GameConfig(layout=args.layout, seed=args.seed)
    engine = TowerDefenseEngine(config, high_scores=None if args.no_save else HighScoreStore())
    engine.set_speed_multiplier(args.speed)

    if args.nogui:
        return run_cli(engine, args.waves, args.tick_ms, logger=lambda msg: print(msg))

    from .game import TowerDefenseGame

    TowerDefenseGame(engine).run()
    return 0


def describe_event(event: GameEvent) -> str:
    details = ", ".join(f"{key}={value}" for key, value in event.data.items())
    return f"[{event.type.value}] {details}"


def auto_place_towers(engine: TowerDefenseEngine, kind: TowerKind = TowerKind.BASIC) -> int:
    """Spend gold on towers in the free cells closest to the path."""
    config = engine.config
    spec = config.towers[kind]
    candidates = []
    for col in range(config.map_width_cells):
        for row in range(config.map_height_cells):
            x, y = config.cell_center(col, row)
            candidates.append((engine.path.distance_to(x, y), (col, row)))
    candidates.sort()

    placed = 0
    for _, cell in candidates:
        if engine.state().gold < spec.cost:
            break
        try:
            engine.place_tower(cell, kind)
        except TowerDefenseError:
            continue
        placed += 1
    return placed


def run_cli(engine: TowerDefenseEngine, waves: int, tick_ms: float, logger: LogFn) -> int:
    def on_event(event: GameEvent) -> None:
        if event.type not in QUIET_EVENTS:
            logger(describe_event(event))

    engine.subscribe(on_event)
    kinds = [kind for kind in TowerKind.ordered() if kind in engine.config.towers]

    while not engine.is_game_over:
        state = engine.state()
        if state.wave_phase is not WavePhase.ACTIVE:
            if state.wave_number >= waves:
                break
            auto_place_towers(engine, kinds[state.wave_number % len(kinds)])
            engine.start_wave()
        engine.tick(tick_ms)

    engine.save_high_score()
    state = engine.state()
    logger(
        f"=== Finished: wave {state.wave_number}, lives {state.lives}, gold {state.gold}, "
        f"score {state.score}, high score {state.high_score}, towers {len(engine.towers)} ==="
    )
    return 1 if state.is_game_over else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
