import functools
import logging

logger = logging.getLogger("calls")


def log_call(fn):
    @functools.wraps(fn)
    def __wrapped(*args, **kwargs):
        logger.debug(f"Calling {fn.__qualname__} {args[1:]} {kwargs}")
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            logger.debug(f"{fn.__qualname__} raised {e.__class__.__name__}: {e}")
            raise
    return __wrapped
