from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import logging
import os

from .errors import ConfigError
from .nameprep import NamePrep, get_nameprep

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CONF = DATA_DIR / "pubsuffix.conf"
CONF_ENV = "PUBSUFFIX_CONF"

_BOOLEANS = {"yes": True, "true": True, "on": True, "1": True,
             "no": False, "false": False, "off": False, "0": False}


class ConfigManager:
    """
    A conf file would look like as follow:

        # relative paths are resolved against the conf file's folder
        suffix-list = public_suffix_list.dat
        private-domains = yes

        nameprep = idna
        cache-size = 4096
    """

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {
            "suffix_list": DATA_DIR / "public_suffix_list.dat",
            "private_domains": True,
            "nameprep": "ascii",
            "cache_size": 1024,
        }

        # valid directives and the functions to parse their value
        self.valid_prefixes = {
            "suffix-list": self._parse_suffix_list_line,
            "private-domains": self._parse_private_domains_line,
            "nameprep": self._parse_nameprep_line,
            "cache-size": self._parse_cache_size_line,
        }
        self._base_dir = DATA_DIR

    def parse_file(self, file_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Parse a conf file. Without a path, $PUBSUFFIX_CONF is used if set,
        else the conf file shipped with the package.
        """
        path = Path(file_path or os.environ.get(CONF_ENV) or DEFAULT_CONF)
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}")

        self._base_dir = path.parent
        self.parse_lines(lines)
        logger.debug(f"Loaded config from {path}: {self.config}")
        return self.config

    def parse_lines(self, lines: List[str]) -> Dict[str, Any]:
        """
        Read all lines first, and report every syntax error at once
        """
        batches: Dict[str, List[Tuple[int, str]]] = {prefix: [] for prefix in self.valid_prefixes}
        errors = []

        for line_num, line in enumerate(lines, start=1):
            line = line.strip()

            # skip comments
            if line.startswith("#") or (not line):
                continue

            equals_pos = line.find("=")
            if equals_pos == -1:
                errors.append((line_num, line, "Missing '=' in configuration line"))
                continue

            directive = line[:equals_pos].strip()
            value = line[equals_pos + 1 :].strip()

            if directive in self.valid_prefixes:
                batches[directive].append((line_num, value))
            else:
                errors.append((line_num, line, f"Unknown directive: {directive}"))

        # verify values with each directive's handler, last one wins
        for prefix, handler in self.valid_prefixes.items():
            for line_num, value in batches[prefix]:
                try:
                    handler(value)
                except ValueError as e:
                    errors.append((line_num, f"{prefix}={value}", str(e)))

        if errors:
            error_message = [
                f"Line {line_num}: {line} - {msg}" for line_num, line, msg in sorted(errors)
            ]
            raise ConfigError("Configuration errors found\n" + "\n".join(error_message))

        return self.config

    def get_suffix_list(self) -> Path:
        return self.config["suffix_list"]

    def get_include_private(self) -> bool:
        return self.config["private_domains"]

    def get_nameprep(self) -> NamePrep:
        return get_nameprep(self.config["nameprep"])

    def get_cache_size(self) -> int:
        return self.config["cache_size"]

    def _parse_suffix_list_line(self, value: str):
        if not value:
            raise ValueError("Empty suffix list path")
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self._base_dir / path
        self.config["suffix_list"] = path

    def _parse_private_domains_line(self, value: str):
        try:
            self.config["private_domains"] = _BOOLEANS[value.lower()]
        except KeyError:
            raise ValueError(f"Expected yes or no: {value}")

    def _parse_nameprep_line(self, value: str):
        # only validate here
        get_nameprep(value)
        self.config["nameprep"] = value

    def _parse_cache_size_line(self, value: str):
        try:
            cache_size = int(value)
        except ValueError:
            raise ValueError(f"Invalid cache size: {value}")

        if cache_size < 0:
            raise ValueError(f"Cache size must not be negative: {value}")
        self.config["cache_size"] = cache_size
