"""Parser management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .client import Client
from .errors import parser_not_found


@dataclass
class ParserTestCase:
    """An input line and the fields a parser should extract from it."""

    input: str = ""
    output: dict[str, str] = field(default_factory=dict)


@dataclass
class Parser:
    """A parser and its source code."""

    id: str = ""
    name: str = ""
    tests: list[str] = field(default_factory=list)
    example: str = ""
    script: str = ""
    tag_fields: list[str] = field(default_factory=list)


@dataclass
class ParserListItem:
    """Summary of a parser as listed in a repository."""

    id: str = ""
    name: str = ""
    is_built_in: bool = False


def _repository_parser(data: dict[str, Any]) -> dict[str, Any] | None:
    return (data.get("repository") or {}).get("parser")


class Parsers:
    """Lists, creates, exports and removes parsers."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def list(self, repository_name: str) -> list[ParserListItem]:
        """All parsers in a repository."""
        data = self.client.query(
            "query($repositoryName: String!) { repository(name: $repositoryName) "
            "{ parsers { id name isBuiltIn } } }",
            {"repositoryName": repository_name},
        )
        repository = data.get("repository") or {}
        return [
            ParserListItem(
                id=item.get("id") or "",
                name=item.get("name") or "",
                is_built_in=bool(item.get("isBuiltIn")),
            )
            for item in repository.get("parsers") or []
        ]

    def remove(self, repository_name: str, parser_name: str) -> None:
        """Delete the parser with this name."""
        parser = self.get(repository_name, parser_name)
        self.client.mutate(
            "mutation($id: String!, $repositoryName: String!) "
            "{ removeParser(input: { id: $id, repositoryName: $repositoryName }) "
            "{ __typename } }",
            {"repositoryName": repository_name, "id": parser.id},
        )

    def add(self, repository_name: str, parser: Parser, force: bool = False) -> None:
        """Create a parser; ``force`` replaces one with the same name."""
        self.client.mutate(
            "mutation($name: String!, $repositoryName: String!, $testData: [String!]!, "
            "$tagFields: [String!]!, $sourceCode: String!, $force: Boolean!) "
            "{ createParser(input: { name: $name, repositoryName: $repositoryName, "
            "testData: $testData, tagFields: $tagFields, sourceCode: $sourceCode, "
            "force: $force}) { __typename } }",
            {
                "name": parser.name,
                "sourceCode": parser.script,
                "repositoryName": repository_name,
                "testData": list(parser.tests),
                "tagFields": list(parser.tag_fields),
                "force": bool(force),
            },
        )

    def get(self, repository_name: str, parser_name: str) -> Parser:
        """The parser with this name."""
        data = self.client.query(
            "query($parserName: String!, $repositoryName: String!) "
            "{ repository(name: $repositoryName) { parser(name: $parserName) "
            "{ id name sourceCode testData tagFields } } }",
            {"parserName": parser_name, "repositoryName": repository_name},
        )
        found = _repository_parser(data)
        if found is None:
            raise parser_not_found(parser_name)
        return Parser(
            id=found.get("id") or "",
            name=found.get("name") or "",
            tests=list(found.get("testData") or []),
            script=found.get("sourceCode") or "",
            tag_fields=list(found.get("tagFields") or []),
        )

    def export(self, repository_name: str, parser_name: str) -> str:
        """The YAML template of the parser with this name."""
        data = self.client.query(
            "query($parserName: String!, $repositoryName: String!) "
            "{ repository(name: $repositoryName) { parser(name: $parserName) "
            "{ name yamlTemplate } } }",
            {"parserName": parser_name, "repositoryName": repository_name},
        )
        found = _repository_parser(data)
        if found is None:
            raise parser_not_found(parser_name)
        return found.get("yamlTemplate") or ""