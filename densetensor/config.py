"""Process-wide defaults for densetensor."""

import os
import tomllib
from dataclasses import dataclass


@dataclass
class TensorConfig:
    """Defaults used when a caller does not pass an explicit value."""

    default_dtype: str = "float64"
    encoding: str = "utf-8"
    strict_trailing: bool = True  # trailing tokens after the last element are a ParseError

    @classmethod
    def load(cls, config_path: str) -> "TensorConfig":
        """
        Load configuration from a TOML file.

        Parameters
        ----------
        config_path : str
            Filesystem path to a TOML file containing a "densetensor" table.

        Returns
        -------
        TensorConfig
            Instance populated from the "densetensor" table; keys not present
            keep their dataclass defaults.

        Raises
        ------
        FileNotFoundError
            If no file exists at `config_path`.
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found at {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data.get("densetensor", {}))


_config = TensorConfig()


def get_config() -> TensorConfig:
    return _config


def set_config(config: TensorConfig) -> TensorConfig:
    """Install `config` as the process-wide default and return the previous one."""
    global _config
    previous = _config
    _config = config
    return previous
