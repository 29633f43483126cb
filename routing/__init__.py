"""Severity routing — method tables built from route lists."""

from routing.errors import InvalidConfiguration
from routing.router import Emitter, Route, build_routes, noop

__all__ = ["Emitter", "InvalidConfiguration", "Route", "build_routes", "noop"]
