#!/usr/bin/env python3
"""Spell Casting Demo with Visual Feedback.

Type an incantation, then hold the left mouse button and draw the spell's
gesture. Releasing the button casts the spell: the gesture is scored
against the spell's pattern and the spell message appears on success.
"""

from typing import List, Optional, Tuple

import pygame

from spellcaster.core.caster import CastResult, SpellCaster
from spellcaster.data.spells import Spellbook
from spellcaster.gestures.projection import Camera
from spellcaster.ui.display import to_screen_coords
from spellcaster.utils.logger import CastLogger


class SpellCastingDemo:
    """Interactive demo for voice (typed) and gesture spellcasting."""

    def __init__(self, width: int = 1280, height: int = 800) -> None:
        pygame.init()
        self.width = width
        self.height = height
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Spellcaster Demo")

        self.spellbook = Spellbook.from_files()
        camera = Camera(screen_width=width, screen_height=height)
        self.caster = SpellCaster(self.spellbook, camera, cast_logger=CastLogger())

        self.incantation = ""
        self.stroke: List[Tuple[int, int]] = []
        self.last_result: Optional[CastResult] = None

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.RED = (255, 0, 0)
        self.GREEN = (0, 160, 0)
        self.PURPLE = (120, 40, 200)
        self.GRAY = (128, 128, 128)

        # Fonts
        self.font = pygame.font.Font(None, 40)
        self.small_font = pygame.font.Font(None, 28)
        self._fonts = {}

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.start_casting(event.pos)
                elif event.type == pygame.MOUSEMOTION and self.caster.is_casting:
                    self.add_point(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    self.finish_casting()
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)

            self.draw()
            clock.tick(60)

    def handle_key(self, event) -> None:
        """Edit the typed incantation."""
        if event.key == pygame.K_BACKSPACE:
            self.incantation = self.incantation[:-1]
        elif event.key == pygame.K_ESCAPE:
            self.incantation = ""
        elif event.unicode and event.unicode.isprintable():
            self.incantation += event.unicode

    def start_casting(self, pos: Tuple[int, int]) -> None:
        """Start recording a new gesture."""
        self.stroke = []
        self.caster.begin_cast()
        self.add_point(pos)

    def add_point(self, pos: Tuple[int, int]) -> None:
        """Record a mouse position; pygame y points down, the camera's up."""
        self.stroke.append(pos)
        x, y = pos
        self.caster.record_screen_point((x, self.height - y))

    def finish_casting(self) -> None:
        """Release the gesture and validate it against the incantation."""
        if not self.caster.is_casting:
            return
        self.last_result = self.caster.end_cast(self.incantation, pygame.time.get_ticks() / 1000.0)
        if self.last_result.succeeded:
            self.incantation = ""

    def _font(self, size: int):
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def draw(self) -> None:
        """Render the UI, the current stroke and active spell messages."""
        self.screen.fill(self.WHITE)

        instructions = [
            "Type an incantation, then hold the left button and draw its gesture.",
            "Backspace: delete   Esc: clear",
            "Spells: " + ", ".join(
                f"{s.incantation} ({s.gesture_pattern.name})" for s in self.spellbook.spells),
        ]
        y = 10
        for line in instructions:
            self.screen.blit(self.small_font.render(line, True, self.BLACK), (10, y))
            y += 28

        prompt = self.font.render(f"Incantation: {self.incantation}", True, self.PURPLE)
        self.screen.blit(prompt, (10, self.height - 50))

        if len(self.stroke) > 1:
            pygame.draw.lines(self.screen, self.RED, False, self.stroke, 4)

        if self.last_result:
            result = self.last_result
            color = self.GREEN if result.succeeded else self.GRAY
            text = f"{result.status}: '{result.incantation}'  score {result.score:.2f}"
            self.screen.blit(self.font.render(text, True, color), (10, self.height - 100))

        now = pygame.time.get_ticks() / 1000.0
        for message in self.caster.display.active_messages(now):
            surface = self._font(message.font_size).render(message.text, True, self.PURPLE)
            pos = to_screen_coords(message.position, self.width, self.height,
                                   surface.get_width(), surface.get_height())
            self.screen.blit(surface, pos)

        pygame.display.flip()


def main() -> None:
    """Entry point for the demo."""
    demo = SpellCastingDemo()
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        demo.caster.cast_logger.close()
        pygame.quit()


if __name__ == "__main__":
    main()
