from shortlink.utils.config import app_env, app_name, project_root, app_prefix, load_config
from shortlink.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from shortlink.utils.shortener import generate_token, is_valid_token
from shortlink.utils.encoding import normalize_target, is_transport_form
from shortlink.utils.logging import initialize_logging


__all__ = [
    'generate_token',
    'is_valid_token',
    'normalize_target',
    'is_transport_form',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
