""" Configuration loader for the tolerances and analyst defaults used by an elongation analysis.

A default configuration file is shipped beside this module. Alternative files placed in the same
directory can be selected by name, or any path can be given directly.
"""

import json
import os

DEFAULT_CONFIG_NAME = "config_default.json"

# Keys every configuration must provide
REQUIRED_KEYS = (
    "azimuth_step",
    "window_half_width",
    "projection_tolerance",
    "pitch_tolerance",
    "min_slope",
    "log_level",
)


def load_config(name=DEFAULT_CONFIG_NAME):
    """Load a configuration file and fill in any missing keys from the defaults.

    Parameters:
    name (str): Name of the configuration file to load. Default is 'config_default.json'. A bare
    file name is resolved against the directory of this script, otherwise it is treated as a path.
    The json may contain any of the following keys:

      - "azimuth_step": integer degree step of the elongation direction sweep
      - "window_half_width": half width in degrees of the analyst's fault selection window
      - "projection_tolerance": relative tolerance for a degenerate Lf - dF
      - "pitch_tolerance": absolute tolerance for a zero pitch denominator
      - "min_slope": smallest accepted magnitude of the fractal regression slope
      - "log_level": level name for the StrainScan logger

    Returns:
    A dictionary containing the configuration parameters.
    """
    # Get the directory of the current script
    dir_path = os.path.dirname(os.path.realpath(__file__))

    if os.path.dirname(name):
        config_path = name
    else:
        config_path = os.path.join(dir_path, name)

    with open(config_path, "r") as file:
        config = json.load(file)

    # Partial files inherit the shipped defaults
    if os.path.realpath(config_path) != os.path.join(dir_path, DEFAULT_CONFIG_NAME):
        with open(os.path.join(dir_path, DEFAULT_CONFIG_NAME), "r") as file:
            defaults = json.load(file)
        defaults.update(config)
        config = defaults

    missing = [key for key in REQUIRED_KEYS if key not in config]
    if missing:
        raise KeyError(f"Configuration {config_path} is missing keys: {missing}")

    if int(config["azimuth_step"]) < 1 or 180 % int(config["azimuth_step"]) != 0:
        raise ValueError("azimuth_step must be a positive integer divisor of 180.")

    return config
