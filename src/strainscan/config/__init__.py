from .load_config import DEFAULT_CONFIG_NAME, load_config
