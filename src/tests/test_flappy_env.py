# src/tests/test_flappy_env.py
"""
Quick tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  pytest src/tests/test_flappy_env.py
  python -m src.tests.test_flappy_env
  python -m src.tests.test_flappy_env --render
  python -m src.tests.test_flappy_env --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from src.env.flappy_env import FlappyEnv


def test_api_check(frame_skip: int = 2) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()
    print("✓ API check ok")


def test_smoke(steps: int = 300, seed: int = 123, frame_skip: int = 2) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["score"] == 0

        env.action_space.seed(seed)
        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Smoke test ok")


def test_determinism(steps: int = 300, seed: int = 123, frame_skip: int = 2) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")

    print("✓ Determinism ok")


def test_noop_falls_to_the_ground(frame_skip: int = 2) -> None:
    """Never flapping must end the episode on the ground with a -1 reward."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        env.reset(seed=7)
        for _ in range(200):
            obs, r, term, trunc, info = env.step(0)
            if term:
                break
        assert term, "entity never landed"
        assert r == -1.0
        assert info["score"] == 0
    finally:
        env.close()


def test_time_limit_truncates() -> None:
    env = FlappyEnv(frame_skip=1, time_limit_seconds=0.1)   # 6 decisions
    try:
        env.reset(seed=1)
        trunc = False
        for _ in range(6):
            _, _, term, trunc, _ = env.step(1)
            assert not term
        assert trunc
    finally:
        env.close()


def test_rgb_array_render_shape() -> None:
    env = FlappyEnv(render_mode="rgb_array", viewport_width=480)
    try:
        env.reset(seed=3)
        env.step(0)
        frame = env.render()
        assert frame.shape == (240, 480, 3) and frame.dtype == np.uint8
    finally:
        env.close()


def test_mode_option_switches_profile() -> None:
    env = FlappyEnv()
    try:
        normal_speed = env.profile.speed
        _, info = env.reset(seed=0, options={"mode": "hard"})
        assert info["mode"] == "hard"
        assert env.profile.speed > normal_speed
    finally:
        env.close()


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps):
            obs, r, term, trunc, info = env.step(0)
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=2, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            test_api_check(frame_skip=args.frame_skip)
        if not args.no_smoke:
            test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        if not args.no_determinism:
            test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
