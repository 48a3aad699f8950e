"""Physics system for the arcade platformer.

Handles player kinematics, enemy patrols, and axis-aligned collision
detection and resolution. Gameplay consequences of collisions (scoring,
death, landing) are reported through a CollisionEvents sink rather than
applied here.

Collision resolution is a single pass over the platform list: each
overlapping platform pushes the player out along one axis, in list order,
with no iterative solve. This order dependence is intentional and gives the
game its feel.
"""

from typing import Sequence, Optional

from .config import PhysicsConstants, GameConfig
from .entities import Player, Platform, Collectible, Enemy, check_collision
from .input import KeyState


class CollisionEvents:
    """Receiver for events raised during a physics tick. Defaults do nothing."""

    def on_coin_collected(self, coin: Collectible) -> None:
        pass

    def on_player_died(self) -> None:
        pass

    def on_player_landed(self) -> None:
        pass


class PhysicsWorld:
    """Steps the player and enemies and resolves their overlaps."""

    def __init__(self, constants: Optional[PhysicsConstants] = None,
                 world_width: float = 800, world_height: float = 600):
        """Initialize physics world.

        Args:
            constants: Per-tick movement constants. Uses defaults if None.
            world_width: Player x is clamped to [0, world_width - player.width].
            world_height: Falling below this y is a death.
        """
        self.constants = constants or PhysicsConstants()
        self.world_width = world_width
        self.world_height = world_height

    @classmethod
    def from_config(cls, config: GameConfig) -> "PhysicsWorld":
        return cls(config.physics, config.world_width, config.world_height)

    def step(
        self,
        player: Player,
        keys: KeyState,
        platforms: Sequence[Platform],
        collectibles: Sequence[Collectible],
        enemies: Sequence[Enemy],
        events: CollisionEvents,
    ) -> None:
        """Advance one tick: player (with collisions), then enemy patrols."""
        self.update_player(player, keys, platforms, collectibles, enemies, events)
        self.update_enemies(enemies)

    def update_player(
        self,
        player: Player,
        keys: KeyState,
        platforms: Sequence[Platform],
        collectibles: Sequence[Collectible],
        enemies: Sequence[Enemy],
        events: CollisionEvents,
    ) -> None:
        """Integrate the player's motion for one tick and handle collisions."""
        c = self.constants

        if keys.left:
            player.velocity_x -= c.move_speed
            player.direction = -1
        if keys.right:
            player.velocity_x += c.move_speed
            player.direction = 1

        # Friction applies every tick, which also sets the top speed.
        player.velocity_x *= c.friction
        player.velocity_x = max(-c.max_speed, min(c.max_speed, player.velocity_x))

        player.velocity_y += c.gravity

        player.x += player.velocity_x
        player.y += player.velocity_y

        player.x = max(0.0, min(self.world_width - player.width, player.x))

        self.handle_collisions(player, platforms, collectibles, enemies, events)

    def update_enemies(self, enemies: Sequence[Enemy]) -> None:
        for enemy in enemies:
            enemy.patrol()

    def handle_collisions(
        self,
        player: Player,
        platforms: Sequence[Platform],
        collectibles: Sequence[Collectible],
        enemies: Sequence[Enemy],
        events: CollisionEvents,
    ) -> None:
        """Resolve platforms, then raise coin, enemy and fall events."""
        was_on_ground = player.is_on_ground
        player.is_on_ground = False

        for platform in platforms:
            if check_collision(player, platform):
                self.resolve_collision(player, platform)

        for coin in collectibles:
            if coin.active and check_collision(player, coin):
                events.on_coin_collected(coin)

        for enemy in enemies:
            if check_collision(player, enemy):
                events.on_player_died()

        if player.y > self.world_height:
            events.on_player_died()

        if player.is_on_ground and not was_on_ground:
            events.on_player_landed()

    def resolve_collision(self, player: Player, platform: Platform) -> None:
        """Push the player out of a platform along the axis of least overlap.

        Landing on top (an upward push) grounds the player. Vertical
        velocity is zeroed on any vertical push, horizontal velocity on any
        horizontal push.
        """
        player_cx, player_cy = player.center
        platform_cx, platform_cy = platform.center

        if player_cx < platform_cx:
            overlap_x = platform.x - (player.x + player.width)
        else:
            overlap_x = platform.x + platform.width - player.x

        if player_cy < platform_cy:
            overlap_y = platform.y - (player.y + player.height)
        else:
            overlap_y = platform.y + platform.height - player.y

        if abs(overlap_x) < abs(overlap_y):
            player.x += overlap_x
            player.velocity_x = 0.0
        else:
            player.y += overlap_y
            if overlap_y < 0:
                player.is_on_ground = True
                player.is_jumping = False
            player.velocity_y = 0.0

    def try_jump(self, player: Player) -> bool:
        """Start a jump if the player is standing and not already jumping.

        Returns:
            True if the jump was accepted.
        """
        if player.is_jumping or not player.is_on_ground:
            return False
        player.velocity_y = self.constants.jump_velocity
        player.is_jumping = True
        player.is_on_ground = False
        return True
