# core/errors.py

class RayTracerError(Exception):
    """Base class for errors the renderer reports to the caller."""


class SceneConstructionError(RayTracerError):
    """
    The scene graph cannot be built: a BVH over nothing, a primitive that
    cannot be bounded, or a change to a scene that is already frozen.
    """


class RenderOutputError(RayTracerError):
    """The rendered image could not be written."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"cannot write image to {path}: {cause}")
        self.path = path
        self.cause = cause
