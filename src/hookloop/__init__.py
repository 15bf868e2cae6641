"""hookloop: hooks-style reactive state layered over a host event loop."""

from importlib.metadata import version as _version

__version__ = _version("hookloop")

from hookloop.effect import ALWAYS, EffectRegistry
from hookloop.errors import HookloopError, HookOrderError, UnknownCommandError
from hookloop.events import EventMultiplexer
from hookloop.host import AsyncioHost, Host, ManualHost
from hookloop.runtime import Runtime
from hookloop.saved import SavedCell
from hookloop.scheduler import Scheduler
from hookloop.state import StateCell, StateStore
# textual NOT auto-imported — opt-in only

__all__ = [
    "ALWAYS",
    "AsyncioHost",
    "EffectRegistry",
    "EventMultiplexer",
    "Host",
    "HookloopError",
    "HookOrderError",
    "ManualHost",
    "Runtime",
    "SavedCell",
    "Scheduler",
    "StateCell",
    "StateStore",
    "UnknownCommandError",
]
