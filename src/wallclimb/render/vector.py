"""Vector back end: gradient sky, flat rock edge and a climber built from shapes."""

from wallclimb.animation.base import ArmPose
from wallclimb.game.holds import HoldSide
from wallclimb.game.snapshot import GameSnapshot
from wallclimb.graphics.primitives import (
    Buffer,
    draw_circle,
    draw_ellipse,
    draw_line,
    draw_rect,
    draw_vertical_gradient,
    hex_to_rgb,
)
from wallclimb.render.base import SceneRenderer

DAY_SKY = (hex_to_rgb("#bfe9ff"), hex_to_rgb("#e6f6ff"))
NIGHT_SKY = (hex_to_rgb("#0a1931"), hex_to_rgb("#0c2340"))
ROCK_EDGE = hex_to_rgb("#bfa98b")
ROCK_EDGE_WIDTH = 80

# Climber colors
LEGS = hex_to_rgb("#3e444d")
ROPE = hex_to_rgb("#f47a30")
BELT = hex_to_rgb("#f7bf4f")
TORSO = hex_to_rgb("#2f6f99")
SKIN = hex_to_rgb("#f7bf85")
HAIR = hex_to_rgb("#5a3d2c")

# Climber proportions (pixels)
TORSO_W, TORSO_H = 50, 70
HEAD_SIZE = 40
LEG_W, LEG_H = 16, 50
ARM_W, ARM_H = 12, 50
HAND_SIZE = 14
FOOT_CLEARANCE = 120

# Horizontal drift toward the pressed side while falling
FALL_DRIFT = 40


class VectorRenderer(SceneRenderer):
    """Draws the climber from rectangles and circles with eased arms."""

    name = "vector"
    corner_radius = 8

    def draw_background(self, buffer: Buffer, snapshot: GameSnapshot) -> None:
        top, bottom = DAY_SKY if snapshot.is_day else NIGHT_SKY
        draw_vertical_gradient(buffer, top, bottom)
        draw_rect(buffer, self.width - ROCK_EDGE_WIDTH, 0, ROCK_EDGE_WIDTH, self.height, ROCK_EDGE)

    def draw_climber(self, buffer: Buffer, snapshot: GameSnapshot) -> None:
        pose = snapshot.pose
        if not isinstance(pose, ArmPose):
            pose = ArmPose()

        # A fall drops the whole figure off the bottom of the screen
        drop = pose.fall * (FOOT_CLEARANCE + TORSO_H + LEG_H + HEAD_SIZE)
        drift = 0.0
        if pose.fall_side is HoldSide.LEFT:
            drift = -FALL_DRIFT * pose.fall
        elif pose.fall_side is HoldSide.RIGHT:
            drift = FALL_DRIFT * pose.fall

        char_x = self.width / 2 - TORSO_W / 2 + drift
        base_y = self.height - FOOT_CLEARANCE + drop
        torso_y = base_y - LEG_H - TORSO_H
        center_x = char_x + TORSO_W / 2

        # Legs
        draw_rect(buffer, char_x + 6, base_y - LEG_H, LEG_W, LEG_H, LEGS)
        draw_rect(buffer, char_x + TORSO_W - LEG_W - 6, base_y - LEG_H, LEG_W, LEG_H, LEGS)

        # Rope hangs from the harness to the bottom edge
        draw_line(buffer, int(center_x), int(base_y), int(center_x), self.height - 1, ROPE, thickness=4)

        # Belt and harness loop
        draw_rect(buffer, char_x, torso_y + TORSO_H - 12, TORSO_W, 12, BELT)
        draw_ellipse(buffer, center_x, torso_y + TORSO_H + 9, 8, 11, ROPE)

        draw_rect(buffer, char_x, torso_y, TORSO_W, TORSO_H, TORSO)

        # Head and hair
        head_x = center_x - HEAD_SIZE / 2
        head_y = torso_y - HEAD_SIZE + 6
        draw_circle(buffer, center_x, head_y + HEAD_SIZE / 2, HEAD_SIZE / 2, SKIN)
        draw_ellipse(
            buffer,
            head_x + HEAD_SIZE / 2,
            head_y + HEAD_SIZE / 3,
            HEAD_SIZE / 2.5,
            HEAD_SIZE / 2.5,
            HAIR,
            upper_half=True,
        )

        # Arms rise by up to one hold spacing
        shoulder_y = torso_y + 10
        left_shoulder_x = char_x - ARM_W
        right_shoulder_x = char_x + TORSO_W
        for shoulder_x, progress in (
            (left_shoulder_x, pose.left_arm),
            (right_shoulder_x, pose.right_arm),
        ):
            arm_top = shoulder_y - progress * self.hold_spacing
            draw_rect(buffer, shoulder_x, arm_top, ARM_W, ARM_H, SKIN)
            draw_circle(buffer, shoulder_x + ARM_W / 2, arm_top - HAND_SIZE / 2, HAND_SIZE / 2, SKIN)
