from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import gymnasium as gym

import falling_blocks.env  # noqa: F401  ensure registration
from falling_blocks.game import format_time

logger = logging.getLogger(__name__)


def run_random(episodes: int = 1, max_steps: int = 5000, seed: Optional[int] = None) -> List[Dict[str, int]]:
    env = gym.make("FallingBlocks-10x20-v0")
    env.action_space.seed(seed)
    results: List[Dict[str, int]] = []
    try:
        for episode in range(episodes):
            obs, info = env.reset(seed=None if seed is None else seed + episode)
            total_reward = 0.0
            for _ in range(max_steps):
                obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
                total_reward += float(reward)
                if terminated or truncated:
                    break
            result = info.get("result") or {
                "score": info["score"],
                "lines": info["lines"],
                "level": info["level"],
                "time": info["elapsed_seconds"],
            }
            results.append(result)
            logger.info(
                "Episode %d: score=%d lines=%d level=%d time=%s (%s)",
                episode, result["score"], result["lines"], result["level"],
                format_time(result["time"]), info["game_state"],
            )
    finally:
        env.close()
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with uniformly random actions")
    p.add_argument("--episodes", type=int, default=1)
    p.add_argument("--max_steps", type=int, default=5000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log_level", type=str, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    run_random(episodes=args.episodes, max_steps=args.max_steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
