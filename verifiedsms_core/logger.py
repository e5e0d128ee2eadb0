import logging, json, sys, time, os


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, UTC timestamps; messages are escaped, not templated."""
    converter = time.gmtime

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def get_logger(name="verifiedsms", level=None):
    """Shared logger for verifiedsms_core modules; VSMS_LOG_LEVEL sets the default level."""
    logger = logging.getLogger(name)
    logger.setLevel(level or os.getenv("VSMS_LOG_LEVEL", "INFO").upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLineFormatter())
        logger.addHandler(handler)

    return logger
