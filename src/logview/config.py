"""Configuration: config file discovery and translation of key/value lines into option arguments."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

from logview.utils.text import normalize_key, split_key, trim

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "logview.conf"
USER_CONFIG_FILENAME = ".logviewrc"
DEFAULT_SYSCONFDIR = "/etc"
SYSCONFDIR_ENV = "LOGVIEW_SYSCONFDIR"

# Reserved values: "true" emits a bare flag, "false" drops the line
TRUE_VALUE = "true"
FALSE_VALUE = "false"


class ConfigError(Exception):
    """Raised when a config file line is malformed (missing key or value)."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        lineno: int | None = None,
        line: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.lineno = lineno
        self.line = line

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path is not None and self.lineno is not None:
            return f"{self.path}:{self.lineno}: {msg}"
        return msg


class ConfigPathError(ConfigError, OSError):
    """Raised when an explicitly requested config file path cannot be resolved."""


class LoadStatus(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass
class ConfigLine:
    """A parsed data line: normalized key and trimmed value."""

    key: str
    value: str
    lineno: int = 0

    def to_args(self) -> list[str]:
        """Option tokens for this line: [], ['--key'] or ['--key', value]."""
        if self.value == FALSE_VALUE:
            return []
        if self.value == TRUE_VALUE:
            return [f"--{self.key}"]
        return [f"--{self.key}", self.value]


class ArgumentVector:
    """Growable argument sequence; index 0 is conventionally the program name."""

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens: list[str] = list(tokens)

    def extend(self, tokens: Iterable[str]) -> None:
        self._tokens.extend(tokens)

    def release(self) -> None:
        """Drop every accumulated token. Safe to call when empty."""
        if not self._tokens:
            return
        self._tokens.clear()

    def to_list(self) -> list[str]:
        """Return an owned copy of the tokens."""
        return list(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __getitem__(self, idx: int) -> str:
        return self._tokens[idx]


@dataclass
class LoadResult:
    """Outcome of load_config: status, augmented argv and the file that was read (if any)."""

    status: LoadStatus
    argv: list[str]
    path: Path | None = None
    lines: list[ConfigLine] = field(default_factory=list)


def global_config_path() -> Path | None:
    """Path to the system-wide config (<sysconfdir>/logview.conf); LOGVIEW_SYSCONFDIR overrides /etc."""
    sysconfdir = os.environ.get(SYSCONFDIR_ENV) or DEFAULT_SYSCONFDIR
    return Path(sysconfdir) / CONFIG_FILENAME


def user_config_path() -> Path | None:
    """Path to the per-user config (~/.logviewrc); None if the home directory is unknown."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return None
    return home / USER_CONFIG_FILENAME


def resolve_explicit_path(path: Path | str) -> Path:
    """Canonicalize an explicitly requested config path. Raises ConfigPathError if it does not resolve."""
    try:
        return Path(path).expanduser().resolve(strict=True)
    except OSError as e:
        raise ConfigPathError(f"Cannot open config file {path}: {e.strerror or e}") from e


def resolve_config_path(
    explicit: Path | str | None = None,
    load_global: bool = False,
) -> Path | None:
    """
    Determine which config file to read.

    Priority: explicit path (hard error if it cannot be resolved), then the global
    config when load_global is set, else the user config. The last two may return None.
    """
    if explicit is not None:
        return resolve_explicit_path(explicit)
    path = global_config_path() if load_global else user_config_path()
    return path.resolve() if path is not None else None


def translate_line(raw: str, lineno: int = 0, path: Path | None = None) -> ConfigLine | None:
    """
    Parse one raw config line (trailing newline allowed).

    Returns None for blank and comment lines. Raises ConfigError for a line with
    no key/value separator, an empty key, or an empty value.
    """
    if not raw or raw[0] in "\n\r#":
        return None

    parts = split_key(raw)
    shown = raw.rstrip("\r\n")
    if parts is None or not parts[0]:
        raise ConfigError(f"Invalid config key at line: {shown}", path=path, lineno=lineno, line=shown)
    key, rest = parts

    value = rest.lstrip(" \t")
    if not value.strip():
        raise ConfigError(f"Invalid config value at line: {shown}", path=path, lineno=lineno, line=shown)

    return ConfigLine(key=normalize_key(key), value=trim(value), lineno=lineno)


def parse_config_lines(lines: Iterable[str], path: Path | None = None) -> list[ConfigLine]:
    """Translate every line in order; the first malformed line aborts with ConfigError."""
    parsed: list[ConfigLine] = []
    for lineno, raw in enumerate(lines, start=1):
        entry = translate_line(raw, lineno, path)
        if entry is not None:
            parsed.append(entry)
    return parsed


class ConfigLoader:
    """
    Builds the augmented argument vector from argv plus a config file.

    The accumulated vector is kept on the loader until release() so a host that
    prefers explicit teardown at exit can have it; load_config() is the stateless form.
    """

    def __init__(self) -> None:
        self._args = ArgumentVector()

    @property
    def args(self) -> ArgumentVector:
        return self._args

    def load(
        self,
        argv: Iterable[str],
        config_file: Path | str | None = None,
        load_global: bool = False,
    ) -> LoadResult:
        """
        Copy argv, then append option tokens for every config line in file order.

        Returns NOT_FOUND (argv unchanged) when no config path is available or the
        file cannot be opened. Raises ConfigPathError for an unresolvable explicit
        path and ConfigError for a malformed line.
        """
        self._args.release()
        self._args.extend(argv)

        path = resolve_config_path(config_file, load_global)
        if path is None:
            logger.debug("No config file location available")
            return LoadResult(LoadStatus.NOT_FOUND, self._args.to_list())

        try:
            f = open(path, encoding="utf-8", errors="replace", newline="")
        except OSError as e:
            logger.debug("Config file %s not readable: %s", path, e)
            return LoadResult(LoadStatus.NOT_FOUND, self._args.to_list())

        with f:
            # newline="" keeps '\r' visible so CR-only lines are skipped as blank
            parsed = parse_config_lines(f, path)

        emitted = 0
        for entry in parsed:
            tokens = entry.to_args()
            if tokens:
                emitted += 1
            self._args.extend(tokens)
        logger.debug("Loaded %d option(s) from %s", emitted, path)
        return LoadResult(LoadStatus.OK, self._args.to_list(), path, parsed)

    def release(self) -> None:
        """Free the accumulated argument vector. No-op if nothing was loaded."""
        self._args.release()


def load_config(
    argv: Iterable[str],
    config_file: Path | str | None = None,
    load_global: bool = False,
) -> LoadResult:
    """
    Load the config file and return argv with file-derived options appended.

    argv[0] is assumed to be the program name. See ConfigLoader.load for errors.
    """
    return ConfigLoader().load(argv, config_file, load_global)
