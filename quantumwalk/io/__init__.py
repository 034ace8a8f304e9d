from .json_io import load_steps, save_steps, save_json, match_result_to_dict
from .config_loader import load_config, build_from_config

__all__ = ["load_steps", "save_steps", "save_json", "match_result_to_dict", "load_config", "build_from_config"]
