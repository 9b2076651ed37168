import sys
import traceback
from typing import Any

from uvicorn.server import logger

from util.config import config

__LEVELS = {"trace": 0, "debug": 1, "info": 2, "warning": 3, "error": 4}


def _should_log(level: str) -> bool:
    if config.log_level == "local":
        return True  # we always log in local context
    current_level = __LEVELS.get(config.log_level, 2)  # default to info
    request_level = __LEVELS.get(level.lower(), 2)
    return request_level >= current_level


def _format_context(context: dict[str, Any]) -> str:
    return ", ".join(f"{key}={value!r}" for key, value in context.items())


def _format_args(*args: Any, **context: Any) -> tuple[str, list[Exception]]:
    exceptions = []
    formatted_parts = []

    # prepare the print components
    for arg in args:
        if isinstance(arg, Exception):
            exceptions.append(arg)
            formatted_parts.append(f"! {str(type(arg).__name__)} (see below)")
        elif hasattr(arg, "__dict__"):
            formatted_parts.append(f"{type(arg).__name__}:\n```\n{repr(arg)}\n```")
        else:
            formatted_parts.append(f"{str(arg)}")

    # structured context is appended to the headline, e.g. "Order created {order_id=5}"
    if context and formatted_parts:
        formatted_parts[0] = f"{formatted_parts[0]} {{{_format_context(context)}}}"
    elif context:
        formatted_parts.append(f"{{{_format_context(context)}}}")

    # edge: no message to print
    if not formatted_parts:
        return "", exceptions

    # edge: only one message line to print
    if len(formatted_parts) == 1:
        return formatted_parts[0], exceptions

    # edge: message lines are available, but no exceptions
    if not exceptions:
        head_lines = "\n ├─ ".join(formatted_parts[:-1])
        tail_line = formatted_parts[-1]
        return f"{head_lines}\n └─ {tail_line}", exceptions

    # message and exceptions are available, connect messages with a tree
    return "\n ├─ ".join(formatted_parts), exceptions


def _print_locally(level: str, message: str, exceptions: list[Exception]):
    if _should_log(level):
        print(f"[{level[0]}] {message}")
    for exception in exceptions:
        print(f" ‼  Message: {str(exception)}", file = sys.stderr)
        if trace := exception.__traceback__:
            trace_lines = traceback.format_tb(trace)
            print("".join(("    " + line.strip()) for line in trace_lines), file = sys.stderr)


def _log_message(level: str, message: str, exceptions: list[Exception]) -> str:
    if not _should_log(level) and not exceptions:
        return message

    if config.log_level == "local":
        _print_locally(level, message, exceptions)
        return message

    # for uvicorn, use the uvicorn logger
    try:
        if _should_log(level):
            match level:
                case "TRACE" | "DEBUG":
                    logger.debug(message)
                case "INFO":
                    logger.info(message)
                case "WARN":
                    logger.warning(message)
                case "ERROR":
                    logger.error(message)
        for exception in exceptions:
            logger.error(f"Message: {str(exception)}")
            if trace := exception.__traceback__:
                indented_trace = "".join(traceback.format_tb(trace)).strip()
                logger.error(f"Details:\n └─ {indented_trace}")
    except Exception:
        # uvicorn logger is not usable, fall back to local printing
        _print_locally(level, message, exceptions)
    return message


def t(*args: Any, **context: Any) -> str:
    message, exceptions = _format_args(*args, **context)
    return _log_message("TRACE", message, exceptions)


def d(*args: Any, **context: Any) -> str:
    message, exceptions = _format_args(*args, **context)
    return _log_message("DEBUG", message, exceptions)


def i(*args: Any, **context: Any) -> str:
    message, exceptions = _format_args(*args, **context)
    return _log_message("INFO", message, exceptions)


def w(*args: Any, **context: Any) -> str:
    message, exceptions = _format_args(*args, **context)
    return _log_message("WARN", message, exceptions)


def e(*args: Any, **context: Any) -> str:
    message, exceptions = _format_args(*args, **context)
    return _log_message("ERROR", message, exceptions)
