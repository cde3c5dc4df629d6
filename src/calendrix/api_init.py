"""Default resolver bootstrap (import side-effect)."""
from .api import set_resolver, set_settings
from .bootstrap import build_resolver
from .config import Settings

_settings = Settings.from_env()
set_settings(_settings)
set_resolver(build_resolver(_settings))
