"""Exception types raised by the Humio API client."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


class HumioError(Exception):
    """Base class for every error raised by this package."""


class GraphQLError(HumioError):
    """The GraphQL endpoint answered with one or more errors."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = list(errors)
        first = self.errors[0] if self.errors else {}
        message = first.get("message", "") if isinstance(first, dict) else str(first)
        super().__init__(message)


class HTTPStatusError(HumioError):
    """The server answered with an unexpected HTTP status code."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EntityType(str, Enum):
    """Kinds of named entities that can be looked up."""

    PARSER = "parser"
    ACTION = "action"
    ALERT = "alert"

    def __str__(self) -> str:
        return self.value


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class EntityNotFound(HumioError, LookupError):
    """A named entity of a given type does not exist."""

    def __init__(self, entity_type: EntityType, key: str) -> None:
        self.entity_type = entity_type
        self.key = key
        super().__init__(f"{entity_type} {_quote(key)} not found")


def parser_not_found(name: str) -> EntityNotFound:
    """Error for a parser that does not exist."""
    return EntityNotFound(EntityType.PARSER, name)


def action_not_found(name: str) -> EntityNotFound:
    """Error for an action that does not exist."""
    return EntityNotFound(EntityType.ACTION, name)


def alert_not_found(name: str) -> EntityNotFound:
    """Error for an alert that does not exist."""
    return EntityNotFound(EntityType.ALERT, name)