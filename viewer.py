from __future__ import annotations

import logging
from typing import Optional, Tuple

import pygame

from config import DotDict, get_config_value, load_config
from counter import BoundedCounter
from hanoi_moves import DEST, SRC, TEMP
from hanoi_stepper import HanoiStateMachine, create_hanoi
from render import BACKGROUND, BASE, HIGHLIGHT, MARGIN, draw_piles, draw_text

logger = logging.getLogger(__name__)


BAR_HEIGHT = 10


class Menu:
    """Disk count picker."""

    def __init__(self, minimum: int, maximum: int, n: int):
        self.count = BoundedCounter(minimum, maximum, n)

    def handle_key(self, key: int) -> Optional[int]:
        """Returns the chosen disk count when the user proceeds."""
        if key == pygame.K_UP:
            self.count.increment()
        elif key == pygame.K_DOWN:
            self.count.decrement()
        elif key in (pygame.K_RETURN, pygame.K_SPACE):
            return self.count.value
        return None

    def draw(self, surf: pygame.Surface):
        W, H = surf.get_size()
        up = "^" if self.count.can_increment else " "
        down = "v" if self.count.can_decrement else " "
        draw_text(surf, up, (W // 2, H // 2 - 70), size=40, center=True)
        draw_text(surf, str(self.count.value), (W // 2, H // 2), size=96, center=True)
        draw_text(surf, down, (W // 2, H // 2 + 70), size=40, center=True)
        draw_text(surf, "up/down: disks   enter: start", (W // 2, H - 30), center=True)


class Runner:
    """
    Plays back the solution for one disk count.

    Owns the auto-play timer; the state machine only gets plain step calls.
    Times are pygame ticks in milliseconds, passed in so the logic does not
    depend on a running display.
    """

    def __init__(self, n: int, autoplay_ms: int = 400, pegs: Tuple[int, int, int] = (SRC, DEST, TEMP)):
        self.hanoi: HanoiStateMachine = create_hanoi(n, pegs)
        self.autoplay_ms = autoplay_ms
        self.playing = False
        self._last_tick = 0

    @property
    def n(self) -> int:
        return self.hanoi.n

    def play_pause(self, now: int):
        if not self.playing and not self.hanoi.can_step:
            return
        if not self.playing:
            self.hanoi.step()
            self._last_tick = now
        self.playing = not self.playing

    def reset(self):
        self.playing = False
        self.hanoi.reset()

    def tick(self, now: int):
        if self.playing and not self.hanoi.can_step:
            self.playing = False
        if self.playing and now - self._last_tick >= self.autoplay_ms:
            self.hanoi.step()
            self._last_tick = now

    def seek_fraction(self, fraction: float):
        if not self.playing:
            self.hanoi.set_to(round(fraction * self.hanoi.total))

    def handle_key(self, key: int, now: int) -> bool:
        """Apply a key press. Returns False when the user leaves the runner."""
        if key == pygame.K_ESCAPE:
            self.playing = False
            return False
        if key == pygame.K_SPACE:
            self.play_pause(now)
        elif key == pygame.K_r:
            self.reset()
        elif self.playing:
            return True
        elif key == pygame.K_RIGHT:
            self.hanoi.step()
        elif key == pygame.K_LEFT:
            self.hanoi.step_back()
        elif key == pygame.K_HOME:
            self.hanoi.set_to(0)
        elif key == pygame.K_END:
            self.hanoi.set_to(self.hanoi.total)
        return True

    def bar_rect(self, size: Tuple[int, int]) -> pygame.Rect:
        W, H = size
        return pygame.Rect(MARGIN, H - 30, W - 2 * MARGIN, BAR_HEIGHT)

    def handle_click(self, pos: Tuple[int, int], size: Tuple[int, int]):
        bar = self.bar_rect(size)
        if bar.inflate(0, 10).collidepoint(pos):
            self.seek_fraction((pos[0] - bar.x) / bar.width)

    def draw(self, surf: pygame.Surface):
        W, _ = surf.get_size()
        state = self.hanoi.current_state()
        draw_text(surf, str(state.i), (W // 2, 40), size=64, center=True)
        draw_text(surf, str(self.hanoi.remaining), (W // 2, 80), center=True)
        draw_piles(surf, state.piles, self.n, top=100)

        bar = self.bar_rect(surf.get_size())
        pygame.draw.rect(surf, BASE, bar, width=1)
        filled = bar.copy()
        filled.width = int(bar.width * state.i / state.total)
        pygame.draw.rect(surf, HIGHLIGHT, filled)

        status = "playing" if self.playing else "paused"
        draw_text(surf, f"{status} | space: play  left/right: step  r: reset  esc: back", (10, 10), size=18)


def main(config: Optional[DotDict] = None, disks: Optional[int] = None):
    config = config or load_config()
    lo = get_config_value(config, "disks.min", 1)
    hi = get_config_value(config, "disks.max", 10)
    n = disks if disks is not None else get_config_value(config, "disks.default", 4)
    window_size = tuple(get_config_value(config, "viewer.window_size", (640, 480)))
    autoplay_ms = get_config_value(config, "viewer.autoplay_ms", 400)
    fps = get_config_value(config, "viewer.fps", 30)
    pegs = (
        get_config_value(config, "pegs.src", SRC),
        get_config_value(config, "pegs.dest", DEST),
        get_config_value(config, "pegs.temp", TEMP),
    )

    pygame.init()
    pygame.display.set_caption("Tower of Hanoi")
    screen = pygame.display.set_mode(window_size)
    clock = pygame.time.Clock()

    menu = Menu(lo, hi, n)
    runner: Optional[Runner] = None
    logger.info("viewer started with %d disks", menu.count.value)

    try:
        running = True
        while running:
            now = pygame.time.get_ticks()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if runner is None:
                        chosen = menu.handle_key(event.key)
                        if chosen is not None:
                            runner = Runner(chosen, autoplay_ms, pegs)
                            logger.info("solving %d disks in %d moves", chosen, runner.hanoi.total)
                    elif not runner.handle_key(event.key, now):
                        menu = Menu(lo, hi, runner.n)
                        runner = None
                elif event.type == pygame.MOUSEBUTTONDOWN and runner is not None:
                    runner.handle_click(event.pos, window_size)

            if runner is not None:
                runner.tick(now)

            screen.fill(BACKGROUND)
            (runner or menu).draw(screen)
            pygame.display.flip()
            clock.tick(fps)
    finally:
        pygame.display.quit()
        pygame.quit()
