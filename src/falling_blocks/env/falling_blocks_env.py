from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, GameConfig, GameSession, ScoringRules, color_rgb
from falling_blocks.game.shapes import NUM_COLORS


FLAT_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.ROTATE,
    Action.STORE,
    Action.NONE,
)


def _piece_id(piece) -> int:
    return 0 if piece is None else int(piece.color_id)


class FallingBlocksEnv(gym.Env):
    """One intent per step; the reward is the engine's score delta.

    Flat boards expose the seven 2D intents, volumetric boards every
    ``Action``. Gravity is not applied implicitly: agents use SOFT_DROP.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
        invalid_action_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig.canvas()
        self.game = GameSession(self.config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        self.actions: Tuple[Action, ...] = FLAT_ACTIONS if self.config.ndim == 2 else tuple(Action)
        dims = self.config.dims

        # Board cells: locked pieces positive, the falling piece negative
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-NUM_COLORS, high=NUM_COLORS, shape=dims, dtype=np.int8),
                "next": spaces.Discrete(NUM_COLORS + 1),
                "stored": spaces.Discrete(NUM_COLORS + 1),
            }
        )
        self.action_space = spaces.Discrete(len(self.actions))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state().astype(np.int8),
            "next": _piece_id(self.game.next_piece),
            "stored": _piece_id(self.game.stored_piece),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared_total": self.game.lines_cleared_total,
            "gravity_interval": self.game.gravity_interval,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        intent = self.actions[int(action)]
        _, gained, done, step_info = self.game.step(intent)

        reward = float(gained)
        if intent != Action.NONE and not step_info.get("changed", False):
            reward += self.invalid_action_penalty
        terminated = bool(done)
        if terminated:
            reward += self.terminal_penalty
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["intent"] = intent.name
        info["engine_score_delta"] = int(gained)
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        if state.ndim == 3:
            # view from the front: nearest non-empty cell along depth wins
            nearest = np.argmax(state != 0, axis=0)
            state = np.take_along_axis(state, nearest[np.newaxis], axis=0)[0]
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = color_rgb(abs(v)) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
