"""Unit tests for the BVH and the HittableList aggregate.

Tests cover:
- BVH traversal agrees with a linear scan of the same primitives
- Split ordering policy (box_sort_key, two-element case, ties)
- Box invariant at every node, singleton leaves
- Construction errors for empty ranges and unbounded primitives
- Repeatability with a pinned axis source
- HittableList closest hit, aggregate box and freezing
"""

import math
import random

import pytest

from core.aabb import AABB
from core.errors import SceneConstructionError
from core.ray import Ray
from core.vector import Vector3
from geometry.bvh import BVHNode, box_sort_key
from geometry.hittable import Hittable
from geometry.prism import RectangularPrism
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian


class FixedAxis:
    """Axis source that always returns the same axis."""

    def __init__(self, axis):
        self.axis = axis

    def randrange(self, n):
        return self.axis


class Unbounded(Hittable):
    """A primitive with no bounding box, such as an infinite plane."""

    def hit(self, ray, t_min, t_max, rng=None):
        return None

    def bounding_box(self, time_start, time_end):
        return None


def random_spheres(material, count, seed):
    rng = random.Random(seed)
    return [Sphere(Vector3(rng.uniform(-10, 10), rng.uniform(-10, 10), rng.uniform(-10, 10)),
                   rng.uniform(0.2, 2.0), material)
            for _ in range(count)]


def random_rays(count, seed):
    rng = random.Random(seed)
    return [Ray(Vector3(rng.uniform(-15, 15), rng.uniform(-15, 15), rng.uniform(-15, 15)),
                Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1)))
            for _ in range(count)]


def walk(node):
    yield node
    for child in (node.left, node.right):
        if isinstance(child, BVHNode):
            yield from walk(child)


class TestTraversal:
    """BVH hits must match a linear scan over the same objects."""

    @pytest.mark.parametrize("axis_source", [FixedAxis(0), FixedAxis(1), FixedAxis(2),
                                             random.Random(3), random.Random(99)])
    def test_matches_linear_scan(self, gray, axis_source):
        objects = random_spheres(gray, 40, seed=5)
        objects.append(RectangularPrism(Vector3(-2, -2, -2), Vector3(1, 3, 2), gray))
        linear = HittableList(objects)
        bvh = BVHNode(objects, 0, len(objects), 0.0, 1.0, axis_source)

        hits = 0
        for ray in random_rays(500, seed=8):
            expected = linear.hit(ray, 0.001, math.inf)
            actual = bvh.hit(ray, 0.001, math.inf)
            if expected is None:
                assert actual is None
            else:
                assert actual is not None
                assert actual.t == pytest.approx(expected.t, abs=1e-9)
                hits += 1
        assert hits > 0

    def test_left_miss_returns_right_hit(self, gray):
        near = Sphere(Vector3(0, 0, -5), 1.0, gray)
        far = Sphere(Vector3(10, 0, -5), 1.0, gray)
        bvh = BVHNode([near, far], 0, 2, 0.0, 1.0, FixedAxis(0))
        assert bvh.left is near
        rec = bvh.hit(Ray(Vector3(10, 0, 0), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)

    def test_closer_right_hit_wins(self, gray):
        back = Sphere(Vector3(-0.5, 0, -10), 1.0, gray)
        front = Sphere(Vector3(0.5, 0, -5), 1.0, gray)
        bvh = BVHNode([front, back], 0, 2, 0.0, 1.0, FixedAxis(0))
        assert bvh.left is back
        rec = bvh.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t < 5.0

    def test_hollow_sphere_reachable_through_bvh(self, gray):
        hollow = Sphere(Vector3(0, 0, -5), -1.0, gray)
        far = Sphere(Vector3(20, 0, -5), 1.0, gray)
        world = HittableList([hollow, far])
        bvh = BVHNode.from_list(world, 0.0, 1.0, FixedAxis(0))
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        expected = world.hit(ray, 0.001, math.inf)
        actual = bvh.hit(ray, 0.001, math.inf)
        assert actual is not None
        assert actual.t == pytest.approx(expected.t)

    def test_equal_t_goes_to_right_child(self):
        first = Lambertian(Vector3(1, 0, 0))
        second = Lambertian(Vector3(0, 1, 0))
        a = Sphere(Vector3(0, 0, -5), 1.0, first)
        b = Sphere(Vector3(0, 0, -5), 1.0, second)
        bvh = BVHNode([a, b], 0, 2, 0.0, 1.0, FixedAxis(0))
        assert bvh.left is b and bvh.right is a
        rec = bvh.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t == pytest.approx(4.0)
        assert rec.material is first

    def test_box_miss_skips_children(self, gray):
        bvh = BVHNode(random_spheres(gray, 10, seed=1), 0, 10, 0.0, 1.0, FixedAxis(0))
        assert bvh.hit(Ray(Vector3(100, 100, 100), Vector3(1, 0, 0)), 0.001, math.inf) is None


class TestConstruction:
    """Tests for BVHNode construction policy."""

    def test_box_invariant_at_every_node(self, gray):
        objects = random_spheres(gray, 25, seed=2)
        root = BVHNode(objects, 0, len(objects), 0.0, 1.0, random.Random(4))
        for node in walk(root):
            expected = AABB.surrounding_box(node.left.bounding_box(0.0, 1.0),
                                            node.right.bounding_box(0.0, 1.0))
            assert node.box == expected
            assert node.bounding_box(0.0, 1.0) is node.box

    def test_every_object_reaches_a_leaf(self, gray):
        objects = random_spheres(gray, 17, seed=6)
        root = BVHNode(objects, 0, len(objects), 0.0, 1.0, random.Random(0))
        leaves = list(root.leaves())
        assert {id(obj) for obj in leaves} == {id(obj) for obj in objects}

    def test_singleton_duplicates_primitive(self, gray):
        sphere = Sphere(Vector3(0, 0, 0), 1.0, gray)
        node = BVHNode([sphere], 0, 1)
        assert node.left is sphere and node.right is sphere
        assert node.box == sphere.bounding_box(0.0, 1.0)
        assert list(node.leaves()) == [sphere, sphere]
        assert node.depth() == 1

    def test_two_elements_strictly_less_goes_left(self, gray):
        a = Sphere(Vector3(5, 0, 0), 1.0, gray)
        b = Sphere(Vector3(-5, 0, 0), 1.0, gray)
        node = BVHNode([a, b], 0, 2, 0.0, 1.0, FixedAxis(0))
        assert node.left is b and node.right is a
        node = BVHNode([b, a], 0, 2, 0.0, 1.0, FixedAxis(0))
        assert node.left is b and node.right is a

    def test_two_elements_tie_puts_second_left(self, gray):
        a = Sphere(Vector3(0, 0, 0), 1.0, gray)
        b = Sphere(Vector3(0, 3, 0), 1.0, gray)
        node = BVHNode([a, b], 0, 2, 0.0, 1.0, FixedAxis(0))
        assert node.left is b and node.right is a

    def test_sort_key_orders_by_box_minimum(self, gray):
        sphere = Sphere(Vector3(1, 2, 3), 0.5, gray)
        assert box_sort_key(sphere, 0, 0.0, 1.0) == (0, 0.5)
        assert box_sort_key(sphere, 2, 0.0, 1.0) == (0, 2.5)

    def test_sort_key_puts_unbounded_last(self, gray):
        bounded = Sphere(Vector3(1e9, 1e9, 1e9), 1.0, gray)
        assert box_sort_key(Unbounded(), 0, 0.0, 1.0) > box_sort_key(bounded, 0, 0.0, 1.0)
        assert box_sort_key(Unbounded(), 0, 0.0, 1.0) == box_sort_key(Unbounded(), 1, 0.0, 1.0)

    def test_caller_order_preserved(self, gray):
        objects = random_spheres(gray, 12, seed=9)
        before = list(objects)
        BVHNode(objects, 0, len(objects), 0.0, 1.0, FixedAxis(1))
        assert all(x is y for x, y in zip(objects, before))

    def test_pinned_axis_is_repeatable(self, gray):
        objects = random_spheres(gray, 30, seed=12)
        first = BVHNode(objects, 0, len(objects), 0.0, 1.0, FixedAxis(2))
        second = BVHNode(objects, 0, len(objects), 0.0, 1.0, FixedAxis(2))
        assert first.box == second.box
        assert first.depth() == second.depth()
        assert [id(o) for o in first.leaves()] == [id(o) for o in second.leaves()]

    def test_seeded_axis_is_repeatable(self, gray):
        objects = random_spheres(gray, 30, seed=12)
        first = BVHNode(objects, 0, len(objects), 0.0, 1.0, random.Random(21))
        second = BVHNode(objects, 0, len(objects), 0.0, 1.0, random.Random(21))
        assert [id(o) for o in first.leaves()] == [id(o) for o in second.leaves()]

    def test_empty_range_raises(self):
        with pytest.raises(SceneConstructionError):
            BVHNode([], 0, 0)

    def test_unbounded_primitive_raises(self, gray):
        with pytest.raises(SceneConstructionError):
            BVHNode([Sphere(Vector3(0, 0, 0), 1.0, gray), Unbounded()], 0, 2)
        with pytest.raises(SceneConstructionError):
            BVHNode([Unbounded()], 0, 1)

    def test_nested_bvh_as_child(self, gray):
        inner = BVHNode.from_list(HittableList(random_spheres(gray, 3, seed=1)))
        outer = BVHNode([inner, Sphere(Vector3(50, 0, 0), 1.0, gray)], 0, 2)
        assert outer.box.contains_box(inner.box)


class TestHittableList:
    """Tests for the HittableList aggregate."""

    def test_closest_hit_wins(self, gray):
        far = Sphere(Vector3(0, 0, -10), 1.0, gray)
        near = Sphere(Vector3(0, 0, -5), 1.0, gray)
        world = HittableList([far, near])
        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t == pytest.approx(4.0)

    def test_empty_list(self):
        world = HittableList()
        assert len(world) == 0
        assert world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 0.001, math.inf) is None
        assert world.bounding_box(0.0, 1.0) is None

    def test_box_of_two_large_spheres(self, gray):
        low = Sphere(Vector3(0, -10, 0), 1000, gray)
        high = Sphere(Vector3(0, 10, 0), 1000, gray)
        box = HittableList([low, high]).bounding_box(0.0, 1.0)
        assert box == AABB.surrounding_box(low.bounding_box(0.0, 1.0), high.bounding_box(0.0, 1.0))
        assert box == AABB(Vector3(-1000, -1010, -1000), Vector3(1000, 1010, 1000))

    def test_unbounded_child_makes_list_unbounded(self, gray):
        world = HittableList([Sphere(Vector3(0, 0, 0), 1.0, gray), Unbounded()])
        assert world.bounding_box(0.0, 1.0) is None

    def test_build_bvh_freezes(self, gray):
        world = HittableList(random_spheres(gray, 5, seed=3))
        root = world.build_bvh(0.0, 1.0, random.Random(0))
        assert world.bvh_root is root
        assert world.frozen
        with pytest.raises(SceneConstructionError):
            world.add(Sphere(Vector3(0, 0, 0), 1.0, gray))
        with pytest.raises(SceneConstructionError):
            world.clear()

    def test_build_bvh_on_empty_list_raises(self):
        with pytest.raises(SceneConstructionError):
            HittableList().build_bvh()

    def test_build_bvh_verbose_prints(self, gray, capsys):
        HittableList(random_spheres(gray, 4, seed=3)).build_bvh(verbose=True)
        out = capsys.readouterr().out
        assert "Building BVH for 4 objects" in out
        assert "BVH built" in out
