"""Tests for SceneManager and the default scene.

Note: Imports are done inside test methods so the conftest.py fixture can
initialize Taichi first.
"""

import pytest


class TestSceneManager:
    """Tests for the Python-side scene container."""

    def test_empty_on_construction(self):
        """Test that a new manager starts with an empty scene."""
        from src.tracer.scene.intersection import add_sphere
        from src.tracer.scene.manager import SceneManager

        add_sphere((0.0, 0.0, 5.0), 1.0)
        scene = SceneManager()

        assert scene.get_primitive_count() == 0
        assert scene.get_point_light_count() == 0
        assert scene.primitives == []

    def test_records_primitives(self):
        """Test that added primitives are tracked in order."""
        from src.tracer.scene.intersection import PrimitiveKind
        from src.tracer.scene.manager import PlaneInfo, SceneManager, SphereInfo

        scene = SceneManager()
        ball = scene.add_sphere((0.0, 0.0, 5.0), 1.0, color=(230, 41, 55, 255))
        ground = scene.add_plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), color=(0, 228, 48, 255))

        assert (ball, ground) == (0, 1)
        assert scene.get_primitive_count() == 2
        assert isinstance(scene.primitives[0], SphereInfo)
        assert isinstance(scene.primitives[1], PlaneInfo)
        assert scene.primitives[0].kind == PrimitiveKind.SPHERE
        assert scene.primitives[1].kind == PrimitiveKind.PLANE
        assert scene.primitives[0].color == (230, 41, 55, 255)

    def test_failed_add_is_not_recorded(self):
        """Test that a rejected primitive leaves no record behind."""
        from src.tracer.scene.manager import SceneManager

        scene = SceneManager()
        with pytest.raises(ValueError):
            scene.add_sphere((0.0, 0.0, 5.0), -2.0)

        assert scene.primitives == []
        assert scene.get_primitive_count() == 0

    def test_set_position_updates_record(self):
        """Test that moving a primitive updates both the field and the record."""
        from src.tracer.scene.intersection import get_position
        from src.tracer.scene.manager import SceneManager

        scene = SceneManager()
        ball = scene.add_sphere((0.0, 0.0, 5.0), 1.0)
        ground = scene.add_plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0))

        scene.set_position(ball, (0.0, 2.5, 5.0))
        scene.set_position(ground, (0.0, -2.0, 0.0))

        assert scene.primitives[ball].center == (0.0, 2.5, 5.0)
        assert scene.primitives[ground].point == (0.0, -2.0, 0.0)
        assert get_position(ball) == pytest.approx((0.0, 2.5, 5.0))

    def test_set_position_rejects_bad_index(self):
        """Test that moving a nonexistent primitive raises."""
        from src.tracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere((0.0, 0.0, 5.0), 1.0)

        with pytest.raises(ValueError, match="out of range"):
            scene.set_position(3, (0.0, 0.0, 0.0))

    def test_lights_and_background(self):
        """Test light and background bookkeeping."""
        from src.tracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_point_light((-2.0, 0.0, 5.0))
        scene.set_directional_light((-2.0, -2.0, 1.0))
        scene.set_background_color((10, 20, 30, 255))

        assert scene.get_point_light_count() == 1
        assert scene.point_lights == [(-2.0, 0.0, 5.0)]
        assert scene.directional_light == pytest.approx((-2.0, -2.0, 1.0))
        assert scene.background_color == (10, 20, 30, 255)

    def test_clear(self):
        """Test that clear empties records and fields."""
        from src.tracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere((0.0, 0.0, 5.0), 1.0)
        scene.add_point_light((0.0, 5.0, 0.0))
        scene.clear()

        assert scene.get_primitive_count() == 0
        assert scene.get_point_light_count() == 0
        assert scene.primitives == []
        assert scene.point_lights == []

    def test_repr(self):
        """Test the string representation."""
        from src.tracer.scene.manager import SceneManager

        scene = SceneManager()
        scene.add_sphere((0.0, 0.0, 5.0), 1.0)

        assert "primitives=1/256" in repr(scene)


class TestDefaultScene:
    """Tests for the default animated scene."""

    def test_contents(self):
        """Test the primitives and lights of the default scene."""
        from src.tracer.core.color import BLUE, GREEN, PINK, RED
        from src.tracer.scene.default_scene import BALL_POSITION, create_default_scene
        from src.tracer.scene.manager import PlaneInfo, SphereInfo

        scene, ball = create_default_scene()

        assert ball == 0
        assert scene.get_primitive_count() == 4
        assert scene.get_point_light_count() == 1
        assert scene.primitives[ball].center == BALL_POSITION
        assert scene.primitives[ball].color == RED
        assert [type(p) for p in scene.primitives] == [SphereInfo, SphereInfo, SphereInfo, PlaneInfo]
        assert [p.color for p in scene.primitives] == [RED, BLUE, PINK, GREEN]
        assert scene.directional_light == pytest.approx((-2.0, -2.0, 1.0))

    def test_everything_in_front_of_camera(self):
        """Test that every sphere center lies at positive z."""
        from src.tracer.scene.default_scene import create_default_scene
        from src.tracer.scene.manager import SphereInfo

        scene, _ = create_default_scene()

        for info in scene.primitives:
            if isinstance(info, SphereInfo):
                assert info.center[2] > 0.0

    def test_custom_params(self):
        """Test overriding colors and lights."""
        from src.tracer.scene.default_scene import DefaultSceneParams, create_default_scene

        params = DefaultSceneParams(
            ball_color=(255, 255, 0, 255),
            point_lights=[(0.0, 10.0, 0.0), (5.0, 5.0, 5.0)],
            background_color=(0, 0, 64, 255),
        )
        scene, ball = create_default_scene(params)

        assert scene.primitives[ball].color == (255, 255, 0, 255)
        assert scene.get_point_light_count() == 2
        assert scene.background_color == (0, 0, 64, 255)
