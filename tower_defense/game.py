"""Turtle front end: draws engine snapshots and forwards input as commands."""

from __future__ import annotations

import logging
import time
import turtle

from .config import GRID_SIZE, PATH_HALF_WIDTH
from .engine import TowerDefenseEngine
from .errors import TowerDefenseError
from .models import EventType, GameEvent, TowerKind

logger = logging.getLogger(__name__)

SCREEN_WIDTH = 1060
SCREEN_HEIGHT = 680
PANEL_WIDTH = 220
FPS = 60

COLOR_BACKGROUND = "#1a1a1a"
COLOR_GRID = "#333333"
COLOR_PATH = "#8b7355"
COLOR_UI_TEXT = "#ffffff"

TOWER_KEYS = {
    "b": TowerKind.BASIC,
    "s": TowerKind.SNIPER,
    "a": TowerKind.AOE,
    "w": TowerKind.SLOW,
}


class TowerDefenseGame:
    """Main game window."""

    def __init__(self, engine: TowerDefenseEngine):
        """Initialize the game window.

        Args:
            engine: The simulation this window renders and controls
        """
        self.engine = engine
        self.message = "Select a tower and place it on the map. Then start the wave!"
        self.engine.subscribe(self.on_event)

        self.screen = turtle.Screen()
        self.screen.setup(width=SCREEN_WIDTH, height=SCREEN_HEIGHT)
        self.screen.bgcolor(COLOR_BACKGROUND)
        self.screen.title("Tower Defense")
        self.screen.tracer(0)

        self.last_frame_time = time.time()
        self.running = True

        self.map_drawer = self._make_drawer()
        self.object_drawer = self._make_drawer()
        self.ui_drawer = self._make_drawer()

        self.setup_input()

    def _make_drawer(self) -> turtle.Turtle:
        drawer = turtle.Turtle()
        drawer.hideturtle()
        drawer.speed(0)
        drawer.penup()
        return drawer

    def setup_input(self):
        """Set up keyboard and mouse input."""
        for key, kind in TOWER_KEYS.items():
            self.screen.onkey(lambda kind=kind: self.select_tower(kind), key)
        self.screen.onkey(self.toggle_pause, "p")
        self.screen.onkey(self.toggle_speed, "f")
        self.screen.onkey(self.reset_game, "r")
        self.screen.onkey(self.cycle_layout, "l")
        self.screen.onkey(self.start_wave, "space")
        self.screen.onkey(self.quit, "Escape")
        self.screen.listen()
        self.screen.onclick(self.on_click)

    # coordinate conversion

    @property
    def map_origin(self):
        return (-SCREEN_WIDTH / 2 + 20, SCREEN_HEIGHT / 2 - 40)

    def to_screen(self, x, y):
        ox, oy = self.map_origin
        return (ox + x, oy - y)

    def to_world(self, sx, sy):
        ox, oy = self.map_origin
        return (sx - ox, oy - sy)

    # input handlers

    def select_tower(self, kind):
        if self.engine.selected_kind is kind:
            self.engine.clear_selection()
            self.message = "Selection cleared."
            return
        self.engine.select_tower_kind(kind)
        spec = self.engine.config.towers[kind]
        self.message = f"Selected {spec.name} ({spec.cost}g). Click on the map to place it."

    def on_click(self, sx, sy):
        if self.engine.selected_kind is None:
            return
        x, y = self.to_world(sx, sy)
        try:
            self.engine.place_tower_at(x, y)
        except TowerDefenseError as exc:
            self.message = exc.reason

    def start_wave(self):
        if self.engine.is_game_over:
            self.engine.reset_game()
            return
        try:
            self.engine.start_wave()
        except TowerDefenseError as exc:
            self.message = exc.reason

    def toggle_pause(self):
        paused = self.engine.toggle_pause()
        self.message = "Paused." if paused else "Resumed."

    def toggle_speed(self):
        self.engine.set_speed_multiplier(2.0 if self.engine.speed_multiplier == 1.0 else 1.0)

    def reset_game(self):
        self.engine.reset_game()

    def cycle_layout(self):
        names = self.engine.config.layout_names()
        current = names.index(self.engine.path.name) if self.engine.path.name in names else -1
        self.engine.select_layout(names[(current + 1) % len(names)])

    def quit(self):
        self.running = False

    def on_event(self, event: GameEvent):
        data = event.data
        if event.type is EventType.TOWER_PLACED:
            self.message = f"{data['kind']} tower placed!"
        elif event.type is EventType.WAVE_STARTED:
            self.message = f"Wave {data['wave']} started!"
        elif event.type is EventType.WAVE_COMPLETE:
            self.message = f"Wave {data['wave']} completed! +{data['bonus']} gold bonus!"
        elif event.type is EventType.GAME_OVER:
            self.message = (
                f"Game Over! You've been defeated at wave {data['wave']}. Final score: {data['score']}. "
                "Press SPACE to restart."
            )
        elif event.type is EventType.GAME_RESET:
            self.message = f"New game on the {data['layout']} map. Place towers, then start the wave!"

    # drawing

    def draw(self):
        self.map_drawer.clear()
        self.object_drawer.clear()
        self.ui_drawer.clear()
        self.draw_map()
        self.draw_towers()
        self.draw_enemies()
        self.draw_projectiles()
        self.draw_ui()
        self.screen.update()

    def draw_map(self):
        config = self.engine.config
        drawer = self.map_drawer
        drawer.color(COLOR_GRID)
        drawer.pensize(1)
        for col in range(config.map_width_cells + 1):
            drawer.goto(*self.to_screen(col * GRID_SIZE, 0))
            drawer.pendown()
            drawer.goto(*self.to_screen(col * GRID_SIZE, config.map_height))
            drawer.penup()
        for row in range(config.map_height_cells + 1):
            drawer.goto(*self.to_screen(0, row * GRID_SIZE))
            drawer.pendown()
            drawer.goto(*self.to_screen(config.map_width, row * GRID_SIZE))
            drawer.penup()

        drawer.color(COLOR_PATH)
        drawer.pensize(PATH_HALF_WIDTH * 2)
        points = self.engine.path.points
        drawer.goto(*self.to_screen(*points[0]))
        drawer.pendown()
        for point in points[1:]:
            drawer.goto(*self.to_screen(*point))
        drawer.penup()
        drawer.pensize(1)

    def draw_towers(self):
        drawer = self.object_drawer
        for tower in self.engine.towers:
            drawer.goto(*self.to_screen(tower.x, tower.y))
            drawer.color(tower.color)
            drawer.dot(28)

    def draw_enemies(self):
        drawer = self.object_drawer
        for enemy in self.engine.enemies:
            sx, sy = self.to_screen(enemy.x, enemy.y)
            drawer.goto(sx, sy)
            drawer.color("#66ccff" if enemy.active_slow else enemy.color)
            drawer.dot(enemy.size * 2)

            health_pct = enemy.get_health_percentage()
            drawer.goto(sx - enemy.size, sy + enemy.size + 6)
            drawer.pensize(3)
            drawer.color("#00ff00" if health_pct > 50 else "#ff9900" if health_pct > 25 else "#ff0000")
            drawer.pendown()
            drawer.forward((health_pct / 100) * enemy.size * 2)
            drawer.penup()
            drawer.pensize(1)

    def draw_projectiles(self):
        drawer = self.object_drawer
        for projectile in self.engine.projectiles:
            drawer.goto(*self.to_screen(projectile.x, projectile.y))
            drawer.color(projectile.source.color if projectile.source else "#ffff00")
            drawer.dot(8 if projectile.is_area_effect else 6)

    def draw_ui(self):
        state = self.engine.state()
        drawer = self.ui_drawer
        drawer.color(COLOR_UI_TEXT)

        ui_x = SCREEN_WIDTH / 2 - PANEL_WIDTH
        ui_y = SCREEN_HEIGHT / 2 - 60
        lines = [
            (f"Lives: {state.lives}", 14, "bold"),
            (f"Gold: {state.gold}", 14, "bold"),
            (f"Wave: {state.wave_number}", 14, "bold"),
            (f"Score: {state.score}", 14, "bold"),
            (f"High score: {state.high_score}", 12, "normal"),
            (f"Enemies left: {state.enemies_remaining}", 12, "normal"),
            (f"Speed: x{state.speed_multiplier:g}", 12, "normal"),
            (f"Map: {state.layout}", 12, "normal"),
        ]
        for kind in TowerKind.ordered():
            spec = self.engine.config.towers.get(kind)
            if spec is None:
                continue
            key = next(k for k, v in TOWER_KEYS.items() if v is kind)
            marker = ">" if state.selected_kind is kind else " "
            lines.append((f"{marker} [{key.upper()}] {spec.name} ({spec.cost}g)", 10, "normal"))

        for index, (text, size, weight) in enumerate(lines):
            drawer.goto(ui_x, ui_y - index * 28)
            drawer.write(text, font=("Arial", size, weight))

        drawer.goto(self.map_origin[0], -SCREEN_HEIGHT / 2 + 12)
        drawer.write(self.message, font=("Arial", 11, "normal"))

        if state.is_paused:
            drawer.goto(*self.to_screen(self.engine.config.map_width / 2, self.engine.config.map_height / 2))
            drawer.write("PAUSED", align="center", font=("Arial", 30, "bold"))
        if state.is_game_over:
            drawer.goto(*self.to_screen(self.engine.config.map_width / 2, self.engine.config.map_height / 2))
            drawer.color("#ff0000")
            drawer.write("GAME OVER", align="center", font=("Arial", 40, "bold"))

    def run(self):
        """Main game loop."""
        try:
            while self.running:
                current_time = time.time()
                elapsed_ms = (current_time - self.last_frame_time) * 1000.0
                self.last_frame_time = current_time

                self.engine.tick(elapsed_ms)
                self.draw()
                time.sleep(1 / FPS)
        except (KeyboardInterrupt, turtle.Terminator):
            logger.info("Window closed")
        finally:
            self.engine.save_high_score()
