# scenes.py
import random
from typing import Callable, Dict, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import DielectricPresets, LambertianPresets, MetalPresets


def three_spheres() -> Tuple[HittableList, Camera]:
    """
    Ground plane with a diffuse, a hollow glass and a fuzzed gold sphere,
    seen from above-left with a shallow depth of field.
    """
    world = HittableList()

    material_ground = LambertianPresets.ground()
    material_center = LambertianPresets.blue()
    material_left = DielectricPresets.glass()
    material_bubble = DielectricPresets.air_bubble()
    material_right = MetalPresets.gold()

    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.2), 0.5, material_center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, material_left))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.4, material_bubble))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, material_right))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        vfov=20,
        lookfrom=Point3(-2, 2, 1),
        lookat=Point3(0, 0, -1),
        vup=Vector3(0, 1, 0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return world, camera


def single_sphere() -> Tuple[HittableList, Camera]:
    """One diffuse sphere resting on a ground sphere, default camera."""
    world = HittableList()
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, Lambertian(Color(0.5, 0.5, 0.5))))
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, Lambertian(Color(0.5, 0.5, 0.5))))

    camera = Camera(aspect_ratio=16.0 / 9.0, image_width=400)
    return world, camera


def random_spheres(seed: int = 0) -> Tuple[HittableList, Camera]:
    """
    Many small random spheres around three large ones. The layout is drawn
    from its own generator so the scene is the same on every call.
    """
    rng = random.Random(seed)
    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, LambertianPresets.gray_ground()))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vector3.random(rng) * Vector3.random(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = Vector3.random(rng, 0.5, 1)
                material = Metal(albedo, rng.uniform(0, 0.5))
            else:
                material = DielectricPresets.glass()
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, LambertianPresets.brown()))
    world.add(Sphere(Point3(4, 1, 0), 1.0, MetalPresets.mirror()))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=1200,
        samples_per_pixel=500,
        max_depth=50,
        vfov=20,
        lookfrom=Point3(13, 2, 3),
        lookat=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, camera


SCENES: Dict[str, Callable[[], Tuple[HittableList, Camera]]] = {
    "three_spheres": three_spheres,
    "single_sphere": single_sphere,
    "random_spheres": random_spheres,
}


def build_scene(name: str) -> Tuple[HittableList, Camera]:
    """
    Raises:
        ValueError: If no scene is registered under name.
    """
    try:
        builder = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene '{name}'. Available: {', '.join(sorted(SCENES))}") from None
    return builder()
