"""
Evaluation Harness
==================

Plays an agent through the seed bank on a GameSession and reports, per
level, how often the target tile was reached and which tiles the runs
topped out at.

Usage:
    python -m crack2048.evaluation.run_eval --agent agents/baseline_greedy
    python -m crack2048.evaluation.run_eval --agent agents/baseline_greedy --campaign
"""

from __future__ import annotations

import argparse
import importlib.util
import inspect
import json
import os
import sys
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from crack2048.core.config_loader import GameConfig, get_config
from crack2048.core.game import GameSession, SessionState
from crack2048.core.levels import LevelTable

Policy = Callable[[Dict[str, np.ndarray], Dict[str, Any]], int]


@dataclass
class LevelRecord:
    """How one level attempt ended."""
    level_index: int
    grid_size: int
    target_tile: int
    score: int
    max_tile: int
    moves_used: int
    wasted_moves: int
    state: str
    truncated: bool

    @property
    def won(self) -> bool:
        return self.state == SessionState.WON.value


@dataclass
class SeedResult:
    """All level attempts played from one seed."""
    seed: int
    levels: List[LevelRecord]
    elapsed_time: float

    @property
    def total_score(self) -> int:
        return sum(r.score for r in self.levels)

    @property
    def final(self) -> LevelRecord:
        return self.levels[-1]


@dataclass
class LevelStats:
    """Aggregate over every attempt of one level."""
    level_index: int
    target_tile: int
    attempts: int = 0
    wins: int = 0
    scores: List[int] = field(default_factory=list)
    max_tiles: Counter = field(default_factory=Counter)

    @property
    def win_rate(self) -> float:
        return self.wins / self.attempts if self.attempts else 0.0

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0


@dataclass
class EvalSummary:
    """Scores are per seed (summed over levels in campaign mode)."""
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    median_score: float
    level_stats: List[LevelStats]
    total_time: float
    results: List[SeedResult]

    @property
    def wins(self) -> int:
        """Seeds whose last level attempt was won."""
        return sum(1 for r in self.results if r.final.won)


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Load the evaluation seed bank.

    Args:
        path: Path to seed_bank.json. Uses default if None.

    Returns:
        List of seeds.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "seed_bank.json")

    with open(path, "r") as f:
        data = json.load(f)

    return [int(s) for s in data["seeds"]]


def _as_policy(act: Callable) -> Policy:
    """Accept both act(obs) and act(obs, info)."""
    try:
        params = list(inspect.signature(act).parameters.values())
    except (TypeError, ValueError):
        return act

    if any(p.kind == p.VAR_POSITIONAL for p in params):
        return act
    positional = [
        p for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if len(positional) >= 2:
        return act

    def policy(obs: Dict[str, np.ndarray], info: Dict[str, Any]) -> int:
        return act(obs)

    return policy


def load_agent(agent_path: str) -> Policy:
    """
    Load an agent from a directory or an agent.py file.

    The module must define a ``Crack2048Agent`` class with an ``act`` method,
    or a standalone ``act`` function. Either may take ``(obs)`` or
    ``(obs, info)``.

    Returns:
        Callable (obs, info) -> direction id.
    """
    agent_path = Path(agent_path)
    agent_file = agent_path / "agent.py" if agent_path.is_dir() else agent_path

    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    spec = importlib.util.spec_from_file_location("agent_module", agent_file)
    if spec is None or spec.loader is None:
        raise ImportError(f"Failed to load agent module from {agent_file}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["agent_module"] = module
    spec.loader.exec_module(module)

    if hasattr(module, "Crack2048Agent"):
        agent_instance = getattr(module, "Crack2048Agent")()
        if not hasattr(agent_instance, "act"):
            raise AttributeError("Crack2048Agent class must have an 'act' method")
        return _as_policy(agent_instance.act)

    if hasattr(module, "act"):
        return _as_policy(getattr(module, "act"))

    raise AttributeError(
        "Agent module must have either 'Crack2048Agent' class with 'act' method "
        "or standalone 'act' function"
    )


def _observe(session: GameSession):
    obs = session.snapshot().to_obs_dict()
    info = session.get_info()
    info["legal_moves"] = [int(d) for d in session.legal_moves()]
    return obs, info


def _play_level(session: GameSession, policy: Policy, max_moves: int) -> LevelRecord:
    """Feed the agent until the level ends or max_moves commands were issued."""
    attempts = 0
    wasted = 0
    while session.state == SessionState.PLAYING and attempts < max_moves:
        obs, info = _observe(session)
        outcome = session.apply_move(int(policy(obs, info)))
        attempts += 1
        if not outcome.changed:
            wasted += 1

    info = session.get_info()
    return LevelRecord(
        level_index=info["level_index"],
        grid_size=info["grid_size"],
        target_tile=info["target_tile"],
        score=info["score"],
        max_tile=info["max_tile"],
        moves_used=info["moves_used"],
        wasted_moves=wasted,
        state=info["state"],
        truncated=session.state == SessionState.PLAYING,
    )


def evaluate_single_seed(
    agent_fn: Policy,
    seed: int,
    level: int = 0,
    campaign: bool = False,
    config: Optional[GameConfig] = None,
    verbose: bool = False
) -> SeedResult:
    """
    Play one seed.

    Args:
        agent_fn: Callable (obs, info) -> direction id, as returned by load_agent.
        seed: Seed for the spawn random source.
        level: Level index to start on.
        campaign: If True, advance to the next level after every win until
            a level is lost, truncated or the last level is won.
        config: Game configuration. Uses default if None.
        verbose: If True, print one line per level.

    Returns:
        SeedResult with one LevelRecord per level attempted.

    Raises:
        ValueError: If level is outside the level table.
    """
    if config is None:
        config = get_config()

    table = LevelTable.from_config(config)
    if not 0 <= level < len(table):
        raise ValueError(f"Level must be in [0, {len(table)}), got {level}")
    for _ in range(level):
        table.advance()

    session = GameSession(config=config, seed=seed, levels=table)
    start_time = time.time()

    records: List[LevelRecord] = []
    while True:
        record = _play_level(session, agent_fn, config.caps.max_moves)
        records.append(record)
        if verbose:
            print(f"  Seed {seed} level {record.level_index} ({record.grid_size}x{record.grid_size}): "
                  f"{record.state}, score={record.score}, max_tile={record.max_tile}, "
                  f"moves={record.moves_used}, wasted={record.wasted_moves}")
        if not (campaign and record.won and not session.levels.is_last()):
            break
        session.advance_level()

    return SeedResult(seed=seed, levels=records, elapsed_time=time.time() - start_time)


def summarize_levels(results: List[SeedResult]) -> List[LevelStats]:
    """Per-level attempts, wins, scores and max-tile distribution."""
    stats: Dict[int, LevelStats] = {}
    for result in results:
        for record in result.levels:
            entry = stats.setdefault(
                record.level_index,
                LevelStats(level_index=record.level_index, target_tile=record.target_tile)
            )
            entry.attempts += 1
            entry.wins += int(record.won)
            entry.scores.append(record.score)
            entry.max_tiles[record.max_tile] += 1
    return [stats[i] for i in sorted(stats)]


def evaluate_agent(
    agent_fn: Policy,
    seeds: Optional[List[int]] = None,
    level: int = 0,
    campaign: bool = False,
    config: Optional[GameConfig] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Evaluate an agent on every seed.

    Args:
        agent_fn: Callable (obs, info) -> direction id.
        seeds: List of seeds. Uses seed_bank.json if None.
        level: Level index to start on.
        campaign: Advance through levels on wins (see evaluate_single_seed).
        config: Game configuration. Uses default if None.
        verbose: If True, print progress and the summary table.

    Returns:
        EvalSummary with per-seed results and per-level statistics.
    """
    if seeds is None:
        seeds = load_seed_bank()
    if not seeds:
        raise ValueError("At least one seed is required")

    if verbose:
        mode = "campaign" if campaign else f"level {level}"
        print(f"Evaluating on {len(seeds)} seeds ({mode})...")

    total_start = time.time()
    results = [
        evaluate_single_seed(agent_fn, seed, level=level, campaign=campaign,
                             config=config, verbose=verbose)
        for seed in seeds
    ]
    total_time = time.time() - total_start

    scores = [r.total_score for r in results]
    summary = EvalSummary(
        mean_score=float(np.mean(scores)),
        std_score=float(np.std(scores)),
        min_score=int(min(scores)),
        max_score=int(max(scores)),
        median_score=float(np.median(scores)),
        level_stats=summarize_levels(results),
        total_time=total_time,
        results=results
    )

    if verbose:
        print_summary(summary)

    return summary


def print_summary(summary: EvalSummary) -> None:
    print()
    print("=" * 50)
    print("EVALUATION SUMMARY")
    print("=" * 50)
    print(f"Seeds evaluated: {len(summary.results)}")
    print(f"Mean score:      {summary.mean_score:.2f} (std {summary.std_score:.2f})")
    print(f"Min / median / max: {summary.min_score} / {summary.median_score:.1f} / {summary.max_score}")
    for stats in summary.level_stats:
        print("-" * 50)
        print(f"Level {stats.level_index} (target {stats.target_tile}): "
              f"{stats.wins}/{stats.attempts} won ({stats.win_rate:.0%}), "
              f"mean score {stats.mean_score:.1f}")
        for tile, count in sorted(stats.max_tiles.items(), reverse=True):
            print(f"  max tile {tile:>6}: {count}")
    print("=" * 50)
    print(f"Total time: {summary.total_time:.2f}s")


def save_results(
    summary: EvalSummary,
    agent_name: str,
    output_path: str
) -> None:
    """Save evaluation results to JSON."""
    data = {
        "agent": agent_name,
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "mean_score": summary.mean_score,
        "std_score": summary.std_score,
        "min_score": summary.min_score,
        "max_score": summary.max_score,
        "median_score": summary.median_score,
        "total_time": summary.total_time,
        "levels": [
            {
                "level_index": s.level_index,
                "target_tile": s.target_tile,
                "attempts": s.attempts,
                "wins": s.wins,
                "win_rate": s.win_rate,
                "mean_score": s.mean_score,
                # JSON keys are strings
                "max_tile_counts": {str(t): c for t, c in sorted(s.max_tiles.items())},
            }
            for s in summary.level_stats
        ],
        "results": [
            {
                "seed": r.seed,
                "total_score": r.total_score,
                "elapsed_time": r.elapsed_time,
                "levels": [vars(record) for record in r.levels],
            }
            for r in summary.results
        ],
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a Crack 2048 agent")
    parser.add_argument("--agent", type=str, required=True,
                        help="Path to agent directory or agent.py file")
    parser.add_argument("--seeds", type=str, default=None,
                        help="Path to seed bank JSON (uses default if not specified)")
    parser.add_argument("--level", type=int, default=0,
                        help="Level index to start on")
    parser.add_argument("--campaign", action="store_true",
                        help="Advance to the next level after each win")
    parser.add_argument("--output", type=str, default=None,
                        help="Path to save results JSON")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the summary")

    args = parser.parse_args()

    print(f"Loading agent from {args.agent}...")
    try:
        agent_fn = load_agent(args.agent)
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error loading agent: {e}")
        return 1

    seeds = load_seed_bank(args.seeds) if args.seeds else None

    try:
        summary = evaluate_agent(
            agent_fn,
            seeds=seeds,
            level=args.level,
            campaign=args.campaign,
            verbose=not args.quiet
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.quiet:
        print_summary(summary)

    if args.output:
        save_results(summary, Path(args.agent).name, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
