"""Pygame 2D front-end for the Smart Farm game.

Renders the crop grid, the farm status panel, toasts and the advisor
chat.  All game rules live in ``SimulationEngine``; this module only
turns input events into engine calls and draws the resulting snapshot.
"""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from smartfarm.advisor.session import AdvisorSession
    from smartfarm.farm.cell import CropCell
    from smartfarm.simulation.engine import SimulationEngine

# Colour palette
_BG = (225, 240, 220)
_EMPTY = (214, 206, 196)
_GROWING = (190, 230, 180)
_READY = (250, 235, 160)
_GRID_LINE = (120, 110, 100)
_TEXT = (40, 50, 40)
_PROGRESS = (60, 170, 80)
_INPUT_BG = (255, 255, 255)

# Crop tile colours by kind; unknown kinds fall back to grey
_CROP_COLOURS: dict[str, tuple[int, int, int]] = {
    "CORN": (230, 190, 40),
    "WHEAT": (200, 160, 90),
    "TOMATO": (210, 60, 50),
}

_TOAST_COLOURS: dict[str, tuple[int, int, int]] = {
    "info": (70, 120, 200),
    "success": (60, 150, 80),
    "warning": (210, 150, 30),
    "error": (200, 60, 60),
}


class FarmRenderer:
    """Renders a SimulationEngine into a Pygame window.

    Attributes:
        engine: The simulation engine to drive and display.
        advisor: Advisor session, or None to hide the chat panel.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    _LOAN_STEP: ClassVar[int] = 100
    _CHAT_LINES: ClassVar[int] = 14

    def __init__(
        self,
        engine: SimulationEngine,
        advisor: AdvisorSession | None = None,
        cell_size: int = 80,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            advisor: Advisor session backing the chat panel.
            cell_size: Pixel width/height per grid cell.
        """
        self.engine = engine
        self.advisor = advisor
        self.cell_size = cell_size
        self.crop_keys = sorted(engine.catalog)

        rows = engine.config.grid_rows
        cols = engine.config.grid_cols
        self._grid_w = cols * cell_size
        self._grid_h = rows * cell_size
        self._panel_width = 420
        self._win_w = self._grid_w + self._panel_width
        self._win_h = max(self._grid_h + 120, 640)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Smart Farm")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.big_font = pygame.font.SysFont("monospace", 22, bold=True)
        self.running = True
        self.typing = False
        self.draft = ""

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, collect advice, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            if self.advisor is not None:
                self.advisor.poll()
            self._draw()

        if self.advisor is not None:
            self.advisor.close()
        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(*event.pos)
            elif event.type == pygame.KEYDOWN:
                if self.typing:
                    self._handle_typing(event)
                else:
                    self._handle_command(event)

    def _handle_click(self, x: int, y: int) -> None:
        if x >= self._grid_w or y >= self._grid_h:
            return
        self.engine.click(y // self.cell_size, x // self.cell_size)

    def _handle_command(self, event: pygame.event.Event) -> None:
        """Keyboard shortcuts while the chat box is not focused."""
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key in (pygame.K_n, pygame.K_SPACE):
            self.engine.advance_day()
        elif event.key == pygame.K_l:
            self.engine.take_loan(self._LOAN_STEP)
        elif event.key == pygame.K_r:
            self.engine.repay_loan(self._LOAN_STEP)
        elif event.key == pygame.K_0:
            self.engine.select_crop(None)
        elif event.key == pygame.K_TAB and self.advisor is not None:
            self.typing = True
        elif pygame.K_1 <= event.key <= pygame.K_9:
            index = event.key - pygame.K_1
            if index < len(self.crop_keys):
                self.engine.select_crop(self.crop_keys[index])

    def _handle_typing(self, event: pygame.event.Event) -> None:
        """Edit the advisor question; Enter submits, Esc/Tab leaves."""
        if event.key in (pygame.K_ESCAPE, pygame.K_TAB):
            self.typing = False
        elif event.key == pygame.K_RETURN:
            if self.advisor is not None and not self.advisor.in_flight:
                if self.advisor.ask(self.engine.snapshot(), self.draft) is not None:
                    self.draft = ""
        elif event.key == pygame.K_BACKSPACE:
            self.draft = self.draft[:-1]
        elif event.unicode and event.unicode.isprintable():
            self.draft += event.unicode

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_grid()
        self._draw_info_panel()
        self._draw_chat()
        self._draw_toasts()
        pygame.display.flip()

    def _draw_grid(self) -> None:
        """Draw every plot, its crop and a growth bar."""
        cs = self.cell_size
        for r, row in enumerate(self.engine.state.grid):
            for c, cell in enumerate(row):
                rect = pygame.Rect(c * cs, r * cs, cs, cs)
                colour = _EMPTY if cell is None else (_READY if cell.ready else _GROWING)
                pygame.draw.rect(self.screen, colour, rect)
                pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)
                if cell is not None:
                    self._draw_crop(cell, rect)

    def _draw_crop(self, cell: CropCell, rect: pygame.Rect) -> None:
        radius = max(4, self.cell_size // 4)
        colour = _CROP_COLOURS.get(cell.kind, (150, 150, 150))
        pygame.draw.circle(self.screen, colour, rect.center, radius)
        label = self.font.render(cell.kind[0], True, _TEXT)
        self.screen.blit(label, label.get_rect(center=rect.center))
        if not cell.ready:
            bar_w = int((rect.width - 16) * cell.progress)
            pygame.draw.rect(
                self.screen,
                _PROGRESS,
                (rect.x + 8, rect.bottom - 10, bar_w, 4),
            )

    def _draw_info_panel(self) -> None:
        """Draw farm status, crop picker and controls."""
        state = self.engine.state
        summary = self.engine.summary()
        x = self._grid_w + 10
        y = 10

        title = self.big_font.render(f"Smart Farm - Day {state.day}", True, _TEXT)
        self.screen.blit(title, (x, y))
        y += 30

        lines = [
            f"Money: ${state.money}   Loans: ${state.loans}",
            f"Weather: {state.weather.value}  {state.temperature}°F  "
            f"moisture {state.moisture}%",
            f"Planted: {summary.planted_count}  Ready: {summary.ready_count}  "
            f"Free: {summary.available_plots}",
            "",
            "--- Crops ---",
        ]
        for i, kind in enumerate(self.crop_keys, start=1):
            crop = self.engine.catalog[kind]
            marker = ">" if kind == self.engine.selected_crop else " "
            lines.append(
                f"{marker}{i}: {kind:<7} ${crop.cost:<3} {crop.growth_time}d "
                f"{crop.temp_min}-{crop.temp_max}°F",
            )
        lines += [
            "",
            "N/SPACE: next day  L/R: loan +/- $100",
            "TAB: ask advisor   ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (x, y))
            y += 18

    def _draw_chat(self) -> None:
        """Draw the tail of the advisor transcript and the input box."""
        if self.advisor is None:
            return
        x = self._grid_w + 10
        top = 260
        width_chars = (self._panel_width - 20) // 8

        wrapped: list[str] = []
        for message in self.advisor.transcript.messages:
            prefix = "You: " if message.role.value == "user" else "Advisor: "
            wrapped += textwrap.wrap(prefix + message.text, width_chars) or [""]
        if self.advisor.in_flight:
            wrapped.append("Advisor is typing...")

        y = top
        for line in wrapped[-self._CHAT_LINES :]:
            self.screen.blit(self.font.render(line, True, _TEXT), (x, y))
            y += 18

        box = pygame.Rect(x, self._win_h - 40, self._panel_width - 20, 26)
        pygame.draw.rect(self.screen, _INPUT_BG, box)
        pygame.draw.rect(self.screen, _GRID_LINE, box, 2 if self.typing else 1)
        hint = self.draft if self.typing or self.draft else "TAB to ask a question"
        self.screen.blit(self.font.render(hint, True, _TEXT), (box.x + 4, box.y + 5))

    def _draw_toasts(self) -> None:
        """Draw unexpired notifications under the grid."""
        y = self._grid_h + 6
        for note in self.engine.notifications.active()[-5:]:
            colour = _TOAST_COLOURS.get(note.level, _TEXT)
            surf = self.font.render(note.message, True, colour)
            self.screen.blit(surf, (10, y))
            y += 20
