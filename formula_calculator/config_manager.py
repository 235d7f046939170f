# config_manager.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


DEFAULT_SETTINGS = {
    "darkmode": False,
    "copy_on_click": True,
    "show_error_details": False,
    "debug": False,
}


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {}


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    settings_dict.update(_read_json(config_json))

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    descriptions = _read_json(ui_strings)

    if key_value == "all":
        return descriptions

    else:
        return descriptions.get(key_value, key_value)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (OSError, TypeError) as e:
        logger.error("Settings could not be saved to %s: %s", config_json, e)
        return {}
