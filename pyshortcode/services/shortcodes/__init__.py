"""
Shortcode subsystem: public API.
"""

from .registry import ShortcodeRegistry, ShortcodeHandler, BaseShortcode, FunctionHandler
from .parser import InvocationParser
from .executor import ShortcodeExecutor
from .engine import ShortcodeEngine
from .context import ShortcodeContext
from .models import Argument, Arguments, Fragment, Invocation, ParsedContent, TextSegment
from .params import parse_arguments
from .builtins import register_all_builtins, create_default_registry
from .errors import (
    ShortcodeError,
    MalformedInvocation,
    MismatchedInvocation,
    MalformedArgument,
    UnknownShortcode,
    HandlerExecutionFailed,
    ExpansionDepthExceeded,
    ExpansionCancelled,
    DuplicateName,
    RegistryFrozen,
)

__all__ = [
    "ShortcodeRegistry",
    "ShortcodeHandler",
    "BaseShortcode",
    "FunctionHandler",
    "InvocationParser",
    "ShortcodeExecutor",
    "ShortcodeEngine",
    "ShortcodeContext",
    "Argument",
    "Arguments",
    "Fragment",
    "Invocation",
    "ParsedContent",
    "TextSegment",
    "parse_arguments",
    "register_all_builtins",
    "create_default_registry",
    "ShortcodeError",
    "MalformedInvocation",
    "MismatchedInvocation",
    "MalformedArgument",
    "UnknownShortcode",
    "HandlerExecutionFailed",
    "ExpansionDepthExceeded",
    "ExpansionCancelled",
    "DuplicateName",
    "RegistryFrozen",
]
