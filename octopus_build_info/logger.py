# octopus_build_info/logger.py
import logging.config
from datetime import datetime

import yaml

from octopus_build_info import constants
from octopus_build_info.util.common_util import get_root_path


def setup_logging(config_path=constants.LOGGING_CONFIG_FILENAME):
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f.read())

    # Always use absolute paths
    base_dir = get_root_path()
    logs_dir = base_dir / "logs"
    logs_dir.mkdir(exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = logs_dir / f"build_info_{timestamp}.log"

    config["handlers"]["file"]["filename"] = str(log_filename)
    config["handlers"]["file"]["mode"] = "w"

    logging.config.dictConfig(config)
    return log_filename
