import argparse
import logging
import time

import numpy as np

import viewer
from config import get_config_value, load_config
from tower_of_hanoi import raw_env

logger = logging.getLogger(__name__)


def play(num_disks: int, policy: str = "optimal", render: bool = False,
         delay: float = 0.0, seed=None) -> float:
    # Create the environment
    env = raw_env(
        num_disks=num_disks,
        render_mode="human" if render else None,
        manual_control=False,
    )
    rng = np.random.default_rng(seed)

    env.reset(seed=seed)

    total_reward = 0.0

    for agent in env.agent_iter():
        obs, reward, term, trunc, info = env.last()
        total_reward += reward

        if term or trunc:
            action = None
        else:
            action = env.expert_action() if policy == "optimal" else None
            if action is None:
                # pick a random legal action
                legal = np.where(obs["action_mask"] == 1)[0]
                action = int(rng.choice(legal))

        env.step(action)

        if delay:
            time.sleep(delay)  # slow down

    logger.info("Episode finished after %d steps. Total reward: %.2f", env.steps, total_reward)
    env.close()
    return total_reward


def main(argv=None):
    parser = argparse.ArgumentParser(description="Tower of Hanoi solution stepper")
    parser.add_argument("--config", default=None, help="YAML configuration file (default: ./config.yaml if present)")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    view = sub.add_parser("view", help="step through the optimal solution")
    view.add_argument("--disks", type=int, default=None)

    play_cmd = sub.add_parser("play", help="play one episode in the environment")
    play_cmd.add_argument("--disks", type=int, default=None)
    play_cmd.add_argument("--policy", choices=["optimal", "random"], default="optimal")
    play_cmd.add_argument("--render", action="store_true")
    play_cmd.add_argument("--delay", type=float, default=0.0, help="seconds between steps")
    play_cmd.add_argument("--seed", type=int, default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = load_config(args.config)
    command = args.command or "view"
    disks = getattr(args, "disks", None)
    lo = get_config_value(config, "disks.min", 1)
    hi = get_config_value(config, "disks.max", 10)
    if disks is not None and not lo <= disks <= hi:
        parser.error(f"--disks must be in [{lo}, {hi}]")

    if command == "play":
        num_disks = disks or get_config_value(config, "disks.default", 4)
        play(num_disks, args.policy, args.render, args.delay, args.seed)
    else:
        viewer.main(config, disks)


if __name__ == "__main__":
    main()
