from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from gymnasium import spaces
from gymnasium.utils import seeding

from pettingzoo.utils.env import AECEnv
from pettingzoo.utils import wrappers

from hanoi_moves import DEST, Move, check_disk_count, solution_length
from hanoi_piles import (
    PilesState,
    apply_move,
    initial_piles,
    is_legal,
    is_solved,
    piles_to_array,
    top_disk,
)
from hanoi_stepper import solution_table
from render import BACKGROUND, draw_piles, draw_text, peg_at

logger = logging.getLogger(__name__)


# Action map: directed peg moves
MOVE_MAP: List[Move] = [
    Move(0, 1),  # 0: A -> B
    Move(0, 2),  # 1: A -> C
    Move(1, 0),  # 2: B -> A
    Move(1, 2),  # 3: B -> C
    Move(2, 0),  # 4: C -> A
    Move(2, 1),  # 5: C -> B
]
ACTION_OF: Dict[Tuple[int, int], int] = {m: a for a, m in enumerate(MOVE_MAP)}


class HanoiEnv(AECEnv):
    """
    Tower of Hanoi (single-agent AEC environment).

    Observation (dict):
        observation:  (3, num_disks) int8 tower representation
        action_mask:  (6,) binary mask for legal actions

    Action space:
        Discrete(6) — directed peg moves defined by MOVE_MAP

    Rewards:
        -0.3   per step after exceeding optimal solution length
        -1.0   illegal action (no state change)
        +10.0  solving the puzzle

    Termination:
        - when puzzle is solved

    Truncation:
        - when max_cycles is reached (optional)
    """

    metadata = {
        "name": "hanoi_v0",
        "render_modes": ["human"],
        "is_parallelizable": False,
        "render_fps": 30,
    }

    def __init__(
        self,
        num_disks: int = 3,
        render_mode: Optional[str] = None,
        window_size: Tuple[int, int] = (640, 480),
        max_cycles: Optional[int] = None,
        manual_control: bool = False,
    ):
        super().__init__()

        self.num_disks = check_disk_count(num_disks)
        self.render_mode = render_mode
        self.window_size = tuple(window_size)
        self.manual_control = manual_control

        self.optimal_steps = solution_length(self.num_disks)
        self.max_cycles = max_cycles or (4 * self.optimal_steps)

        # optimal path, indexed by the configuration reached after k moves
        self._solution, states = solution_table(self.num_disks)
        self._path_index = {s: k for k, s in enumerate(states)}

        # --- single-agent bookkeeping ---------------------------------------
        self.possible_agents = ["player_0"]

        self.observation_spaces = {
            "player_0": spaces.Dict(
                {
                    "observation": spaces.Box(
                        low=0,
                        high=self.num_disks,
                        shape=(3, self.num_disks),
                        dtype=np.int8,
                    ),
                    "action_mask": spaces.MultiBinary(6),
                }
            )
        }

        self.action_spaces = {
            "player_0": spaces.Discrete(6)
        }

        # --- internal state ---------------------------------------------------
        self.piles: PilesState = initial_piles(self.num_disks)
        self.steps = 0

        # RNG
        self.np_random, _ = seeding.np_random(None)

        # rendering
        self._pygame_inited = False
        self._screen = None
        self._clock = None
        self._surf = None
        self._selected_src = None

    def observation_space(self, agent: str):
        return self.observation_spaces[agent]

    def action_space(self, agent: str):
        return self.action_spaces[agent]

    # ------------------------------------------------------------------------
    # AEC API
    # ------------------------------------------------------------------------
    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        if seed is not None:
            self.np_random, _ = seeding.np_random(seed)

        self.agents = self.possible_agents[:]
        self.agent_selection = self.agents[0]

        self.rewards = {agent: 0.0 for agent in self.agents}
        self._cumulative_rewards = {agent: 0.0 for agent in self.agents}
        self.terminations = {agent: False for agent in self.agents}
        self.truncations = {agent: False for agent in self.agents}
        self.infos = {agent: {} for agent in self.agents}

        self.piles = initial_piles(self.num_disks)
        self.steps = 0
        self._selected_src = None

        if self.render_mode == "human":
            self._init_pygame()
            self.render()

    def step(self, action: Optional[int]):
        agent = self.agent_selection

        if self.terminations[agent] or self.truncations[agent]:
            self._was_dead_step(action)
            return

        self._cumulative_rewards[agent] = 0.0
        self._clear_rewards()
        self.infos[agent] = {}
        reward = 0.0

        move = MOVE_MAP[action]
        if not is_legal(self.piles, move):
            reward -= 1.0
            self.infos[agent]["illegal_action"] = True
        else:
            self.piles = apply_move(self.piles, move)

        self.steps += 1

        # Penalize only after exceeding optimal steps
        if self.steps > self.optimal_steps:
            reward -= 0.3

        solved = self._is_solved()
        if solved:
            reward += 10.0
            self.terminations[agent] = True
            logger.debug("solved %d disks in %d steps", self.num_disks, self.steps)

        # Truncation
        if self.steps >= self.max_cycles and not solved:
            self.truncations[agent] = True

        self.rewards[agent] = reward
        self._cumulative_rewards[agent] += reward

        if self.render_mode == "human":
            self.render()

    def observe(self, agent: str):
        return {
            "observation": piles_to_array(self.piles, self.num_disks),
            "action_mask": self._legal_action_mask().astype(np.int8),
        }

    def close(self):
        if self._pygame_inited:
            pygame.display.quit()
            pygame.quit()
            self._pygame_inited = False

    # ------------------------------------------------------------------------
    # Core game logic
    # ------------------------------------------------------------------------
    def _legal_action_mask(self) -> np.ndarray:
        return np.array([is_legal(self.piles, m) for m in MOVE_MAP], dtype=np.bool_)

    def _is_solved(self) -> bool:
        return is_solved(self.piles, DEST)

    def expert_action(self) -> Optional[int]:
        """Next optimal action, or None once off the optimal path or solved."""
        k = self._path_index.get(self.piles)
        if k is None or k >= len(self._solution):
            return None
        return ACTION_OF[self._solution[k]]

    # ------------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------------
    def render(self):
        if self.render_mode is None:
            return
        if self.render_mode == "human":
            self._render_pygame()

    def _init_pygame(self):
        if self._pygame_inited:
            return
        pygame.init()
        pygame.display.set_caption("Tower of Hanoi (PettingZoo)")
        self._screen = pygame.display.set_mode(self.window_size)
        self._clock = pygame.time.Clock()
        self._pygame_inited = True

    def _draw_surface(self):
        if self._surf is None:
            self._surf = pygame.Surface(self.window_size)

        self._surf.fill(BACKGROUND)
        draw_piles(self._surf, self.piles, self.num_disks, selected=self._selected_src)
        draw_text(self._surf, f"steps: {self.steps} | solved: {self._is_solved()}", (10, 10))
        return self._surf

    def _render_pygame(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()
                return
            if self.manual_control and event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_click(event.pos)

        self._screen.blit(self._draw_surface(), (0, 0))
        pygame.display.flip()
        self._clock.tick(self.metadata["render_fps"])

    def _handle_mouse_click(self, pos: Tuple[int, int]):
        peg = peg_at(pos[0], self.window_size[0])

        if self._selected_src is None:
            if top_disk(self.piles, peg) is not None:
                self._selected_src = peg
        else:
            src = self._selected_src
            self._selected_src = None

            action = ACTION_OF.get((src, peg))
            if action is not None and is_legal(self.piles, MOVE_MAP[action]):
                self.step(action)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------
def raw_env(**kwargs) -> HanoiEnv:
    return HanoiEnv(**kwargs)


def env(**kwargs):
    base = raw_env(**kwargs)
    return wrappers.OrderEnforcingWrapper(base)
