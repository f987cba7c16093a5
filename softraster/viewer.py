import numpy as np
import pygame

from .framebuffer import Framebuffer


def framebuffer_to_surface(framebuffer: Framebuffer) -> pygame.Surface:
    # surfarray is [x, y] with y growing down; the framebuffer's y grows up.
    return pygame.surfarray.make_surface(np.ascontiguousarray(framebuffer.color[:, ::-1]))


def show(framebuffer: Framebuffer, title: str = "softraster") -> None:
    """Present the framebuffer until the window is closed or Esc is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((framebuffer.width, framebuffer.height))
        pygame.display.set_caption(title)
        screen.blit(framebuffer_to_surface(framebuffer), (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
