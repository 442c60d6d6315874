from __future__ import annotations

"""
Rotating File Handler.

Rolls the log file over when it would exceed a byte or line budget:
``app.log`` becomes ``app.log.1``, older backups shift up by one and the
oldest beyond ``backup_count`` is dropped. Rollover happens inside
``emit`` and therefore under the handler lock. The new live file is opened
before the old one is released, so ``out`` is never empty mid-rollover. A
stream installed with ``with_output`` is written as is and never rotated.
"""

import logging
import os
from typing import TYPE_CHECKING, Any, Mapping, Optional

from logrelay.core.formatters import Formatter
from logrelay.core.handlers import FileHandler, _lookup_formatter
from logrelay.domain.config_models import RotatingFileHandlerConfig
from logrelay.domain.constants import DEFAULT_FORMATTER_NAME
from logrelay.domain.levels import NOTHING, level_by_name
from logrelay.domain.record import LogRecord
from logrelay.infra.diagnostics import report_error

if TYPE_CHECKING:
    from logrelay.core.registry import Registry

logger = logging.getLogger(__name__)

_COUNT_CHUNK_SIZE: int = 32 * 1024


class RotatingFileHandler(FileHandler):
    """
    File handler with size and line based rollover.

    Args:
        filename: Target log file.
        max_bytes: Roll over before the file reaches this size; 0 disables.
        max_lines: Roll over before the file reaches this many lines; 0 disables.
        backup_count: Rotated files to keep; 0 truncates in place.
    """

    def __init__(
            self,
            filename: Optional[str] = None,
            max_bytes: int = 0,
            max_lines: int = 0,
            backup_count: int = 1,
            name: str = "",
            level: int = NOTHING,
            formatter: Optional[Formatter] = None,
    ) -> None:
        self.max_bytes = max_bytes
        self.max_lines = max_lines
        self.backup_count = backup_count
        self.cur_size = 0
        self.cur_lines = 0
        super().__init__(filename=filename, name=name, level=level, formatter=formatter)

    def load_config(
            self,
            config: Mapping[str, Any],
            registry: Optional["Registry"] = None,
    ) -> None:
        cfg = RotatingFileHandlerConfig.from_mapping(config, DEFAULT_FORMATTER_NAME)
        formatter = _lookup_formatter(cfg.formatter, registry)
        level = level_by_name(cfg.level)
        self.max_bytes = cfg.max_bytes
        self.max_lines = cfg.max_lines
        self.backup_count = cfg.backup_count
        self._open(cfg.filename)
        self.name = cfg.name
        self.level = level
        self.formatter = formatter

    def emit(self, record: LogRecord) -> None:
        self._require_output()
        line = self._render(record)
        if line is None:
            return
        if self.out is not self._file:
            self._write_line(line)
            return

        size = len((line + "\n").encode("utf-8"))
        if self.should_rollover(size):
            self.do_rollover()
        if self._write_line(line):
            self.cur_size += size
            self.cur_lines += 1

    def should_rollover(self, size: int) -> bool:
        """Return True if writing ``size`` more bytes would exceed a budget."""
        if self.max_bytes > 0 and self.cur_size + size >= self.max_bytes:
            return True
        if self.max_lines > 0 and self.cur_lines + 1 >= self.max_lines:
            return True
        return False

    def do_rollover(self) -> None:
        """
        Rotate backups and swap in an empty live file.

        Must be called with the handler lock held. On failure the current
        stream stays in place and the record is still written.
        """
        previous = self._file
        if previous is None:
            return

        try:
            previous.flush()
            if self.backup_count > 0:
                self._shift_backups()
                mode = "a"
            else:
                mode = "w"
            stream = open(self.path, mode, encoding="utf-8")
        except (OSError, ValueError) as e:
            report_error(f"Rollover of {self.path} failed, [{e}]")
            return

        self._file = stream
        self.out = stream
        self.cur_size = 0
        self.cur_lines = 0
        try:
            previous.close()
        except OSError as e:
            report_error(f"Close log file after rollover failed, [{e}]")
        logger.debug(f"RotatingFileHandler: rolled over {self.path}")

    def count_lines(self) -> int:
        """Count newline characters in the live file."""
        count = 0
        with open(self.path, "rb") as f:
            while True:
                chunk = f.read(_COUNT_CHUNK_SIZE)
                if not chunk:
                    break
                count += chunk.count(b"\n")
        return count

    def _open(self, filename: str) -> None:
        super()._open(filename)
        try:
            self.cur_size = os.path.getsize(self.path)
            self.cur_lines = self.count_lines() if self.max_lines > 0 else 0
        except OSError as e:
            report_error(f"Inspect log file {self.path} failed, [{e}]")
            self.cur_size = 0
            self.cur_lines = 0

    def _shift_backups(self) -> None:
        for i in range(self.backup_count - 1, 0, -1):
            src = f"{self.path}.{i}"
            dst = f"{self.path}.{i + 1}"
            if os.path.exists(src):
                os.replace(src, dst)
        if os.path.exists(self.path):
            os.replace(self.path, f"{self.path}.1")
