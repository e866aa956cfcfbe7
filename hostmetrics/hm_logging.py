import datetime
import logging
import sys

# Two levels sit between the stdlib ones: STATUS for progress lines that
#   should show by default, VERBOSE for counts shown with --verbose.
STATUS = 25
VERBOSE = 15
DEBUG = logging.DEBUG

DEFAULT_STREAM_LOG_LEVEL = logging.INFO

CUSTOM_LEVELS = {
    'STATUS': STATUS,
    'VERBOSE': VERBOSE,
}

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.CRITICAL: "\033[1;31m",
    logging.ERROR: "\033[1;31m",
    logging.WARNING: "\033[0;33m",
    STATUS: "\033[1;34m",
}


def _level_method(level_num):
    def log_func(self, message, *args, **kwargs):
        if self.isEnabledFor(level_num):
            self._log(level_num, message, args, **kwargs)
    return log_func


class HMLogger(logging.Logger):
    """Logger with ``status`` and ``verbose`` methods.

    Records built through the level helpers are attributed to the caller of
    the helper, so the debug formatter reports the collector line.
    """

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=3):
        fn, lno, func, sinfo = self.findCaller(stack_info, stacklevel)
        if exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()

        record = self.makeRecord(self.name, level, fn, lno, msg, args, exc_info, func, extra, sinfo)
        self.handle(record)


for _name, _num in CUSTOM_LEVELS.items():
    logging.addLevelName(_num, _name)
    setattr(HMLogger, _name.lower(), _level_method(_num))


class ColoredStandardFormatter(logging.Formatter):
    location = False

    def format(self, record):
        timestamp = datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        prefix = f"{timestamp}|{record.levelname}:"
        if self.location:
            prefix = f"{prefix}{record.module}:{record.lineno}:"
        message = f"{LEVEL_COLORS.get(record.levelno, RESET)}{prefix} {record.getMessage()}{RESET}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class ColoredDebugFormatter(ColoredStandardFormatter):
    location = True


def setup_logging(name=__name__, stream_log_level=DEFAULT_STREAM_LOG_LEVEL):
    if isinstance(stream_log_level, str):
        stream_log_level = logging.getLevelName(stream_log_level.upper())

    _logger = HMLogger(name)
    _logger.setLevel(logging.DEBUG)

    # stderr keeps stdout free for documents printed by the VMware collector
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredStandardFormatter())
    handler.setLevel(stream_log_level)
    _logger.addHandler(handler)

    return _logger


def apply_logging_options(_logger, args):
    """Lower or override the stream level from --verbose, --debug and --stream_log_level."""
    if args is None:
        return
    handlers = [h for h in _logger.handlers if not hasattr(h, 'baseFilename')]

    for handler in handlers:
        if getattr(args, "verbose", False) and handler.level > VERBOSE:
            handler.setLevel(VERBOSE)
        if getattr(args, "debug", False):
            handler.setFormatter(ColoredDebugFormatter())
            if handler.level > DEBUG:
                handler.setLevel(DEBUG)
        if getattr(args, "stream_log_level", None):
            handler.setLevel(args.stream_log_level.upper())
