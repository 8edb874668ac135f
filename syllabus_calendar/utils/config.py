import logging
from pathlib import Path
from typing import Union

import yaml

from ..models import CalendarConfig
from .tools import CONFIG_PATH

logger = logging.getLogger(__name__)


def load_config(path: Union[str, Path] = CONFIG_PATH) -> CalendarConfig:
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    config = CalendarConfig.model_validate(raw or {})
    logger.info(
        f"loaded {path.name}: years={sorted(config.terms)} "
        f"periods={len(config.periods)} tz={config.timeZone}"
    )
    return config
