# examples/basic_viewer/main.py

import sys
import os
import json
import logging
import logging.config

import numpy as np
import pygame
import pygame_gui

# 'examples' is not part of the installed package, so make the repository root
# importable when the viewer is run from a source checkout.
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from planet_generator import PlanetParameters, TemporalSettings
from planet_generator.runtime import Planet

# --- Display Constants ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
CLOCK_TICK_RATE = 60

# --- UI Constants ---
UI_PANEL_WIDTH = 320
UI_ELEMENT_HEIGHT = 25
UI_SLIDER_HEIGHT = 30
UI_PADDING = 10
UI_BUTTON_HEIGHT = 40

# --- Preview Constants ---
# Preview textures are smaller than the defaults so regeneration stays interactive.
PREVIEW_CONFIG = {
    'planet_texture_size': (512, 256),
    'cloud_texture_size': (512, 256),
    'ring_texture_size': (256, 256),
    'moon_texture_size': (128, 64),
}
# Seconds between texture refreshes while the planet is evolving.
EVOLVING_REFRESH_SECONDS = 1.0
# Seconds between status overlay refreshes.
STATUS_REFRESH_SECONDS = 0.5
# Real seconds to simulated years for the preview clock.
PREVIEW_YEARS_PER_SECOND = 1000.0


class Application:
    """Interactive preview of a single planet: textures, evolution and weather."""

    def __init__(self):
        self._setup_logging()
        self.logger.info("Application starting.")

        self.rng = np.random.default_rng()
        self.parameters = PlanetParameters(has_rings=True, has_moon=True)
        self.temporal_settings = TemporalSettings(geological_time=0.5, weather_cycle=0.5, erosion_level=0.3)
        self.planet = Planet(self.parameters, PREVIEW_CONFIG, rng=self.rng)

        self._setup_pygame()
        self._setup_ui()

        self.is_running = True
        self.textures_dirty = True
        self.surfaces = {}
        self.refresh_timer = 0.0
        self.status_timer = 0.0

    def _setup_logging(self):
        """Initializes the logging system from the JSON config beside this script."""
        log_config_path = os.path.join(os.path.dirname(__file__), 'logging_config.json')
        log_dir = 'logs'
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        with open(log_config_path, 'rt') as f:
            log_config = json.load(f)
        log_config['handlers']['file']['filename'] = os.path.join(log_dir, 'viewer.log')

        logging.config.dictConfig(log_config)
        self.logger = logging.getLogger(__name__)

    def _setup_pygame(self):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Procedural Planet Generator")
        self.clock = pygame.time.Clock()
        self.logger.info(f"Pygame initialized ({SCREEN_WIDTH}x{SCREEN_HEIGHT}).")

    def _setup_ui(self):
        """Creates the side panel: temporal sliders, clock buttons and a status readout."""
        self.ui_manager = pygame_gui.UIManager((SCREEN_WIDTH, SCREEN_HEIGHT))
        panel_rect = pygame.Rect(SCREEN_WIDTH - UI_PANEL_WIDTH, 0, UI_PANEL_WIDTH, SCREEN_HEIGHT)
        self.ui_panel = pygame_gui.elements.UIPanel(relative_rect=panel_rect, manager=self.ui_manager, starting_height=1)

        current_y = UI_PADDING
        element_width = UI_PANEL_WIDTH - (3 * UI_PADDING)

        self.sliders = {}
        for field, label in [("geological_time", "Geological Time"),
                             ("weather_cycle", "Weather Cycle"),
                             ("erosion_level", "Erosion")]:
            pygame_gui.elements.UILabel(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_ELEMENT_HEIGHT),
                text=label, manager=self.ui_manager, container=self.ui_panel
            )
            current_y += UI_ELEMENT_HEIGHT
            slider = pygame_gui.elements.UIHorizontalSlider(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_SLIDER_HEIGHT),
                start_value=getattr(self.temporal_settings, field),
                value_range=(0.0, 1.0),
                manager=self.ui_manager, container=self.ui_panel
            )
            self.sliders[slider] = field
            current_y += UI_SLIDER_HEIGHT + UI_PADDING

        self.buttons = {}
        for action, label in [("pause", "Pause / Resume"),
                              ("fast_forward", "Fast Forward 1M years"),
                              ("reset", "Reset Time"),
                              ("new_seed", "New Seed")]:
            button = pygame_gui.elements.UIButton(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_BUTTON_HEIGHT),
                text=label, manager=self.ui_manager, container=self.ui_panel
            )
            self.buttons[button] = action
            current_y += UI_BUTTON_HEIGHT + UI_PADDING

        self.status_labels = {}
        for key in ["time_description", "epoch", "active_storms", "average_cloud_cover", "global_wind_speed"]:
            self.status_labels[key] = pygame_gui.elements.UILabel(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_ELEMENT_HEIGHT),
                text="", manager=self.ui_manager, container=self.ui_panel
            )
            current_y += UI_ELEMENT_HEIGHT

    def run(self):
        """The main application loop."""
        self.logger.info("Entering main loop.")
        try:
            while self.is_running:
                time_delta = self.clock.tick(CLOCK_TICK_RATE) / 1000.0

                self._handle_events()
                self._update(time_delta)
                self._draw()

                self.ui_manager.update(time_delta)
                self.ui_manager.draw_ui(self.screen)
                pygame.display.flip()
        except Exception:
            self.logger.critical("An unhandled exception occurred!", exc_info=True)
            raise
        finally:
            self.logger.info("Exiting application.")
            pygame.quit()

    def _handle_events(self):
        for event in pygame.event.get():
            self.ui_manager.process_events(event)

            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif event.key == pygame.K_SPACE:
                    self._perform("pause")
                elif event.key == pygame.K_f:
                    self._perform("fast_forward")
                elif event.key == pygame.K_r:
                    self._perform("reset")
                elif event.key == pygame.K_n:
                    self._perform("new_seed")

            if event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED and event.ui_element in self.sliders:
                field = self.sliders[event.ui_element]
                self.temporal_settings = self.temporal_settings.replace(**{field: event.value})
                self.textures_dirty = True
            elif event.type == pygame_gui.UI_BUTTON_PRESSED and event.ui_element in self.buttons:
                self._perform(self.buttons[event.ui_element])

    def _perform(self, action: str):
        self.logger.info(f"Event: {action}.")
        if action == "pause":
            self.temporal_settings = self.temporal_settings.replace(is_paused=not self.temporal_settings.is_paused)
        elif action == "fast_forward":
            self.planet.fast_forward()
        elif action == "reset":
            self.planet.reset_time()
        elif action == "new_seed":
            self.parameters = self.parameters.replace(seed=int(self.rng.integers(0, 2**31)))
            self.planet.set_parameters(self.parameters)
        self.textures_dirty = True

    def _update(self, time_delta: float):
        settings = self.temporal_settings.replace(time_speed=1.0)
        # The clock is in years; scale real seconds up so evolution is visible.
        self.planet.update(time_delta * PREVIEW_YEARS_PER_SECOND, settings)

        self.refresh_timer += time_delta
        if not settings.is_paused and settings.geological_time > 0 and self.refresh_timer >= EVOLVING_REFRESH_SECONDS:
            self.textures_dirty = True

        if self.textures_dirty:
            self._regenerate_surfaces()
            self.textures_dirty = False
            self.refresh_timer = 0.0

        self.status_timer += time_delta
        if self.status_timer >= STATUS_REFRESH_SECONDS:
            self._refresh_status()
            self.status_timer = 0.0

    def _regenerate_surfaces(self):
        textures = self.planet.regenerate_textures(self.temporal_settings)
        self.surfaces = {name: self._to_surface(texture) for name, texture in textures.items()}

    @staticmethod
    def _to_surface(texture: np.ndarray) -> pygame.Surface:
        """Converts an (H, W, 3|4) uint8 texture to a pygame surface."""
        height, width = texture.shape[:2]
        if texture.shape[2] == 3:
            return pygame.surfarray.make_surface(texture.swapaxes(0, 1))
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.surfarray.blit_array(surface, texture[..., :3].swapaxes(0, 1))
        alpha = pygame.surfarray.pixels_alpha(surface)
        alpha[:] = texture[..., 3].swapaxes(0, 1)
        del alpha
        return surface

    def _refresh_status(self):
        status = self.planet.status()
        self.status_labels["time_description"].set_text(f"Time: {status['time_description']}")
        self.status_labels["epoch"].set_text(f"Epoch: {status['epoch']}")
        self.status_labels["active_storms"].set_text(f"Storms: {status['active_storms']}")
        self.status_labels["average_cloud_cover"].set_text(f"Cloud cover: {status['average_cloud_cover']:.2f}")
        self.status_labels["global_wind_speed"].set_text(f"Wind speed: {status['global_wind_speed']:.2f}")

    def _draw(self):
        self.screen.fill((5, 5, 15))
        view_width = SCREEN_WIDTH - UI_PANEL_WIDTH

        planet = self.surfaces.get("planet")
        if planet is None:
            return
        map_rect = planet.get_rect(center=(view_width // 2, SCREEN_HEIGHT // 3))
        self.screen.blit(planet, map_rect)
        if "clouds" in self.surfaces:
            self.screen.blit(self.surfaces["clouds"], map_rect)

        bottom_y = map_rect.bottom + UI_PADDING * 2
        if "rings" in self.surfaces:
            self.screen.blit(self.surfaces["rings"], (UI_PADDING * 2, bottom_y))
        if "moon" in self.surfaces:
            self.screen.blit(self.surfaces["moon"], (view_width - UI_PADDING * 2 - self.surfaces["moon"].get_width(), bottom_y))


if __name__ == '__main__':
    app = Application()
    app.run()
