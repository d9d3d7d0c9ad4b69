from . import api, views  # noqa: F401
