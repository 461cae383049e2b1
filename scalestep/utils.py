from __future__ import annotations

import logging
import os
import random
import string

def set_seed(seed: int = 42) -> None:
    """Set random seeds for reproducible step ids."""
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)

def rand_id(prefix: str, length: int = 5) -> str:
    """Return ``prefix`` followed by a short random alphanumeric suffix."""
    chars = string.ascii_letters + string.digits
    return f"{prefix}_{''.join(random.choices(chars, k=length))}"

def get_logger(name: str = "scalestep") -> logging.Logger:
    """Return a configured logger."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(ch)
    return logger
