from . import attempts, views  # noqa: F401
