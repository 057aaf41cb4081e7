"""Firework particles: launch rockets, explosion debris, and the field that owns them."""

from __future__ import annotations

from enum import Enum, auto
import logging
import random
import pygame

from .settings import FireworkSettings
from .utils import LOGGER_NAME, Size

logger = logging.getLogger(LOGGER_NAME)

Vector = pygame.math.Vector2

LAUNCH_POINT_SIZE = 4
DEBRIS_DOT_SIZE = 6


def hsb_color(hue: float, alpha: float = 255) -> pygame.Color:
    """Fully saturated, full brightness colour for a hue in degrees."""
    color = pygame.Color(0, 0, 0)
    color.hsva = (hue % 360, 100, 100, max(0.0, min(255.0, alpha)) / 255 * 100)
    return color


class Particle(pygame.sprite.Sprite):
    """Point mass advanced with a forward Euler step each frame."""

    def __init__(
        self,
        position: Vector | tuple[float, float],
        velocity: Vector | tuple[float, float],
        hue: float | None = None,
        is_launch: bool = False,
        settings: FireworkSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or FireworkSettings()
        self.position = Vector(position)
        self.velocity = Vector(velocity)
        self.acceleration = Vector(0, 0)
        self.hue = hue if hue is not None else (rng or random).uniform(0, 360)
        self.lifespan = self.settings.lifespan
        self.is_launch = bool(is_launch)

        size = LAUNCH_POINT_SIZE if self.is_launch else DEBRIS_DOT_SIZE
        self.image = pygame.Surface((size, size), pygame.SRCALPHA)
        self.rect = self.image.get_rect()
        self._refresh_image()

    def apply_force(self, force: Vector) -> None:
        """Accumulate a force into this step's acceleration."""
        self.acceleration += force

    def update(self) -> None:
        """Damp, integrate velocity, integrate position, clear the accumulator."""
        if not self.is_launch:
            self.velocity *= self.settings.drag
            self.lifespan -= self.settings.decay
        self.velocity += self.acceleration
        self.position += self.velocity
        self.acceleration = Vector(0, 0)
        self._refresh_image()

    def done(self) -> bool:
        return self.lifespan <= 0

    def _refresh_image(self) -> None:
        # Rockets are a bright point; debris fades with its lifespan.
        radius = self.image.get_width() // 2
        alpha = 255 if self.is_launch else self.lifespan
        self.image.fill((0, 0, 0, 0))
        pygame.draw.circle(self.image, hsb_color(self.hue, alpha), (radius, radius), radius)
        self.rect.center = (int(self.position.x), int(self.position.y))

    def render(self, surface: pygame.Surface) -> None:
        self.rect.center = (int(self.position.x), int(self.position.y))
        surface.blit(self.image, self.rect)


class FireworkStage(Enum):
    """Lifecycle of a single firework."""

    RISING = auto()
    EXPANDING = auto()
    SPENT = auto()


class Firework:
    """One rocket that climbs, bursts into debris, and fades out."""

    def __init__(
        self,
        bounds: Size,
        settings: FireworkSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or FireworkSettings()
        self.rng = rng or random.Random()
        self.gravity = Vector(0, self.settings.gravity)
        self.hue = self.rng.uniform(0, 360)

        width, height = bounds
        start = Vector(self.rng.uniform(0, width), height)
        velocity = Vector(self.rng.uniform(*self.settings.launch_vx), self.rng.uniform(*self.settings.launch_vy))
        self.launch = Particle(start, velocity, self.hue, is_launch=True, settings=self.settings)
        self.exploded = False
        self.particles: pygame.sprite.Group = pygame.sprite.Group()

    @property
    def stage(self) -> FireworkStage:
        if not self.exploded:
            return FireworkStage.RISING
        if self.particles:
            return FireworkStage.EXPANDING
        return FireworkStage.SPENT

    def done(self) -> bool:
        return self.exploded and not self.particles

    def explode(self) -> None:
        """Burst into debris at the rocket's current position."""
        count = self.rng.randrange(self.settings.explosion_min, self.settings.explosion_max)
        for _ in range(count):
            velocity = Vector(1, 0).rotate(self.rng.uniform(0, 360))
            velocity *= self.rng.uniform(*self.settings.debris_speed)
            self.particles.add(
                Particle(self.launch.position, velocity, self.hue, is_launch=False, settings=self.settings)
            )

    def update(self) -> None:
        """Advance the rocket until it bursts, then advance and cull debris."""
        if not self.exploded:
            self.launch.apply_force(self.gravity)
            self.launch.update()
            # Falling rockets burst; a small per-frame chance bursts them early.
            if self.launch.velocity.y >= 0 or self.rng.random() < self.settings.early_explode_chance:
                self.exploded = True
                self.explode()

        debris_gravity = self.gravity * self.settings.debris_gravity_scale
        # sprites() is a snapshot, so killing during the pass skips nothing.
        for particle in self.particles.sprites():
            particle.apply_force(debris_gravity)
            particle.update()
            if particle.done():
                particle.kill()

    def render(self, surface: pygame.Surface) -> None:
        if not self.exploded:
            self.launch.render(surface)
        self.particles.draw(surface)


class FireworkField:
    """Owns every active firework."""

    def __init__(self, settings: FireworkSettings | None = None, rng: random.Random | None = None) -> None:
        self.settings = settings or FireworkSettings()
        self.rng = rng or random.Random()
        self.fireworks: list[Firework] = []

    def __len__(self) -> int:
        return len(self.fireworks)

    def spawn(self, count: int, bounds: Size) -> int:
        """Launch ``count`` fireworks from the bottom edge of ``bounds``."""
        if count <= 0:
            return 0
        for _ in range(count):
            self.fireworks.append(Firework(bounds, self.settings, self.rng))
        logger.info("Spawned %d fireworks (%d active)", count, len(self.fireworks))
        return count

    def tick(self, surface: pygame.Surface | None = None) -> int:
        """Update and draw every firework, dropping spent ones. Returns how many were dropped."""
        removed = 0
        for index in range(len(self.fireworks) - 1, -1, -1):
            firework = self.fireworks[index]
            firework.update()
            if surface is not None:
                firework.render(surface)
            if firework.done():
                del self.fireworks[index]
                removed += 1
        return removed
