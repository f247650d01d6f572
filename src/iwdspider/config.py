import copy
import os
import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.expanduser('~'), '.config', 'iwd-spider', 'config.yaml')

DEFAULT_CONFIG = {
    'bus': 'system',
    'service': 'net.connman.iwd',
    'call_timeout_ms': -1,
    'scan_wait_seconds': 5,
    'logging': {
        'level': 'INFO',
        'file': None,
        'format': 'text',
        'syslog_address': None,
    },
}


def resolve_config_path(path: str | None = None) -> str:
    cfg_path = path or os.environ.get(
        'IWDSPIDER_CONFIG') or DEFAULT_CONFIG_PATH
    return os.path.abspath(os.path.expanduser(cfg_path))


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | None = None) -> dict:
    cfg_path = resolve_config_path(path)
    if not os.path.exists(cfg_path):
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(cfg_path, 'r', encoding='utf-8') as fh:
        loaded = yaml.safe_load(fh) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f'{cfg_path} must contain a mapping, not {type(loaded).__name__}')
    return _merge(DEFAULT_CONFIG, loaded)


def save_config(cfg: dict, path: str | None = None) -> str:
    cfg_path = resolve_config_path(path)
    os.makedirs(os.path.dirname(cfg_path), exist_ok=True)
    with open(cfg_path, 'w', encoding='utf-8') as fh:
        yaml.safe_dump(_merge(DEFAULT_CONFIG, cfg), fh)
    return cfg_path
