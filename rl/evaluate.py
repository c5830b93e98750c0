"""
Evaluation script for trained Catch the Stars agents
"""

import argparse
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.catch2D import CatchStarsEnv
from rl.configs.catch_config import ENV_CONFIG, ALGORITHMS


def _load_model(model_path: str, algo: str):
    if algo == "ppo":
        return PPO.load(model_path)
    if algo == "dqn":
        return DQN.load(model_path)
    raise ValueError(f"Unknown algorithm: {algo}")


def _report(title: str, rewards, lengths, scores):
    print("\n" + "="*50)
    print(f"{title} ({len(rewards)} episodes):")
    print(f"Mean Reward: {np.mean(rewards):.2f} ± {np.std(rewards):.2f}")
    print(f"Mean Score: {np.mean(scores):.1f}  (min {np.min(scores)}, max {np.max(scores)})")
    print(f"Mean Episode Length: {np.mean(lengths):.1f}")
    print("="*50)

    return {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "episode_rewards": list(rewards),
        "episode_scores": list(scores),
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    model = _load_model(model_path, algo)

    render_mode = "human" if render else None
    env = DummyVecEnv([lambda: CatchStarsEnv(render_mode=render_mode, **ENV_CONFIG)])
    if seed is not None:
        env.seed(seed)

    # Load VecNormalize if provided (typically for PPO)
    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards, episode_lengths, episode_scores = [], [], []

    obs = env.reset()
    for episode in range(n_episodes):
        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            if done[0]:
                break

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info[0]["score"])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Score = {info[0]['score']}, Reward = {total_reward:.2f}, Length = {steps}")

    env.close()
    return _report("Evaluation Results", episode_rewards, episode_lengths, episode_scores)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = CatchStarsEnv(render_mode=None, **ENV_CONFIG)
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards, episode_lengths, episode_scores = [], [], []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])

    env.close()
    return _report("Random Policy Results", episode_rewards, episode_lengths, episode_scores)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained Catch the Stars agent")
    parser.add_argument(
        "model_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the trained model (omit to only run the random baseline)",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=list(ALGORITHMS),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    if args.model_path is None:
        compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        return

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    # Compare with random policy if requested
    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
        )

        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
