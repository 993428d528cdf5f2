from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from hanoi_moves import PEG_COUNT
from hanoi_piles import PilesState


BACKGROUND = (245, 245, 245)
INK = (20, 20, 20)
BASE = (40, 40, 40)
PEG = (80, 80, 80)
HIGHLIGHT = (200, 160, 0)

MARGIN = 60


def peg_positions(width: int) -> List[int]:
    return [int(width / 6), int(width / 2), int(5 * width / 6)]


def peg_at(x: int, width: int) -> int:
    """Index of the peg whose column is closest to ``x``."""
    return min(range(PEG_COUNT), key=lambda p: abs(x - peg_positions(width)[p]))


def disk_color(disk: int) -> Tuple[int, int, int]:
    d = disk - 1
    return (min(255, 60 + 30 * d), min(255, 120 + 20 * d), min(255, 160 + 10 * d))


def draw_piles(
    surf: pygame.Surface,
    piles: PilesState,
    num_disks: int,
    selected: Optional[int] = None,
    top: int = 0,
):
    """Draw the base, the three pegs and every disk onto ``surf``."""
    W, H = surf.get_size()
    base_y = H - 60
    peg_x = peg_positions(W)
    peg_h = int((H - top) * 0.65)

    pygame.draw.rect(surf, BASE, (MARGIN, base_y, W - 2 * MARGIN, 6))

    for i, x in enumerate(peg_x):
        color = HIGHLIGHT if selected == i else PEG
        pygame.draw.rect(surf, color, (x - 6, base_y - peg_h, 12, peg_h), border_radius=4)

    max_w = int((W - 2 * MARGIN) / 3 * 0.9)
    min_w = int(max_w * 0.3)
    disk_h = max(12, min(28, int((peg_h - 40) / num_disks)))

    for p, stack in enumerate(piles):
        for level, disk in enumerate(stack):
            w = int(min_w + (max_w - min_w) * disk / num_disks)
            x = peg_x[p] - w // 2
            y = base_y - (level + 1) * (disk_h + 4)
            pygame.draw.rect(surf, disk_color(disk), (x, y, w, disk_h), border_radius=6)


def draw_text(surf: pygame.Surface, text: str, pos: Tuple[int, int], size: int = 22, center=False):
    font = pygame.font.SysFont(None, size)
    img = font.render(text, True, INK)
    rect = img.get_rect()
    if center:
        rect.center = pos
    else:
        rect.topleft = pos
    surf.blit(img, rect)
