# io/interpolator_logging.py
import json
import logging
import sys

LOGGER_NAME = "pathpos"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever `sys.stderr` is when a record is emitted."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, _):
        pass


def json_handler(stream=None) -> logging.Handler:
    h = logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    h.setFormatter(JsonFormatter())
    return h


def _default_json_logger(name=LOGGER_NAME, level="INFO"):
    # stdout carries positions; records go to stderr
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(json_handler())
        if logger.level == logging.NOTSET:
            logger.setLevel(level)
    return logger


class InterpolatorLogging:
    """
    One place to shape and emit structured logs for interpolator construction and queries.
    Holds no per-query state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.threshold, self.debug = getattr(logging, level), debug
        self.log = logger or _default_json_logger(level="DEBUG" if debug else level)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        lvl = getattr(logging, level)
        if lvl < self.threshold and not (self.debug and lvl == logging.DEBUG):
            return
        self.log.log(lvl, msg, extra={"extra": extra})

    # --------------------------------------------------------

    def interpolator_ready(
        self, *, points: int, unit: str, total_length: float, return_format: str
    ):
        self._emit(
            "INFO",
            "interpolator_ready",
            points=points,
            unit=unit,
            total_length=total_length,
            return_format=return_format,
        )

    def spec_rejected(self, exc: BaseException):
        reason = getattr(exc, "reason", str(exc))
        self._emit("WARNING", "spec_rejected", error=type(exc).__name__, reason=reason)

    def query(self, *, hours: float, distance: float):
        if self.debug:
            self._emit("DEBUG", "query", hours=hours, distance=distance)
