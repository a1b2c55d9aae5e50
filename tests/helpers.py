"""Shared test helpers for the gqlforge test suite.

Generated modules need an execution context at runtime. ``FakeContext`` is
the smallest one that honours the contract: it collects fields (including
type-conditioned fragments checked against the satisfies table), holds the
resolvers and context value, and records reported errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gqlforge.code_nodes import FunctionDef, Module, Param, Return, Stmt
from gqlforge.encoders import encoder_def
from gqlforge.generator import generate
from gqlforge.model import (
    ANY_TYPE_NAME,
    Argument,
    Field,
    Modifier,
    Object,
    SchemaModel,
    Type,
)
from gqlforge.printer import PythonPrinter
from gqlforge.serializer import ValueSerializer

OPTIONAL = Modifier.OPTIONAL
LIST = Modifier.LIST

STRING = Type("str", "String", basic=True)
INT = Type("int", "Int", basic=True)
ID = Type("str", "ID", basic=True)
FLOAT = Type("float", "Float", basic=True)
BOOLEAN = Type("bool", "Boolean", basic=True)


# ── Runtime fake ─────────────────────────────────────────────────


@dataclass
class Selected:
    name: str
    alias: str = ""
    args: dict[str, Any] = field(default_factory=dict)
    selections: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.alias:
            self.alias = self.name


@dataclass
class Fragment:
    type_condition: str
    selections: list[Any]


def sel(name: str, *selections: Any, alias: str = "", **args: Any) -> Selected:
    return Selected(name, alias, dict(args), list(selections))


class FakeContext:
    """Execution context the generated dispatchers run against."""

    def __init__(self, resolvers: Any = None, ctx: Any = None) -> None:
        self.resolvers = resolvers
        self.ctx = ctx if ctx is not None else {"request": "test"}
        self.errors: list[Exception] = []
        self.satisfies_seen: list[list[str]] = []

    def collect_fields(self, sel: list[Any], satisfies: list[str], visited: dict) -> list[Selected]:
        self.satisfies_seen.append(list(satisfies))
        collected: list[Selected] = []
        seen: set[str] = set()
        for item in sel:
            if isinstance(item, Fragment):
                if item.type_condition not in satisfies:
                    continue
                nested = self.collect_fields(item.selections, satisfies, visited)
            else:
                nested = [item]
            for f in nested:
                if f.alias not in seen:
                    seen.add(f.alias)
                    collected.append(f)
        return collected

    def error(self, err: Exception) -> None:
        self.errors.append(err)


def load_generated(source: str, **host: Any) -> dict[str, Any]:
    """Execute generated source with *host* names available as globals."""
    namespace: dict[str, Any] = {"__name__": "generated", **host}
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace


def _compile(serializer: ValueSerializer, stmts: list[Stmt], result: str):
    defs = [encoder_def(name) for name in serializer.encoders]
    fn = FunctionDef("run", [Param("res")], [*stmts, Return(result)])
    source = PythonPrinter().format(Module([*defs, fn]))
    return load_generated(source)["run"]


def encoder_function(ty: Type, scalars: dict[str, str] | None = None):
    """Compile the serializer output for *ty* into ``run(res)``."""
    serializer = ValueSerializer(scalars)
    return _compile(serializer, serializer.serialize(ty, "res", "out"), "out")


def coercer_function(ty: Type, **host: Any):
    """Compile the argument check for *ty* into ``run(res)``."""
    serializer = ValueSerializer()
    run = _compile(serializer, serializer.coerce(ty, "res", "coerced"), "coerced")
    run.__globals__.update(host)
    return run


# ── Blog model ───────────────────────────────────────────────────


class User:
    def __init__(self, name: str, email: str | None = None) -> None:
        self.name = name
        self.email = email


class Post:
    def __init__(
        self,
        title: str,
        author: User | None = None,
        tags: list[str] | None = None,
        words: int = 0,
    ) -> None:
        self.title_value = title
        self.author = author
        self.tags = tags or []
        self.words = words
        self.related_posts: list[Post] = []

    def word_count(self) -> int:
        return self.words

    def related(self, first: int | None) -> list[Post]:
        if first is None:
            return self.related_posts
        return self.related_posts[:first]


USER_T = Type("User", "User")
POST_T = Type("Post", "Post")
NODE_T = Type("Node", "Node", implementors=(POST_T, USER_T))
QUERY_T = Type(ANY_TYPE_NAME, "Query")

BLOG_SCHEMA = """\
interface Node { id: ID! }
type User implements Node { name: String! email: String }
type Post implements Node {
  title: String!
  author: User
  tags: [String!]!
  wordCount: Int!
  related(first: Int): [Post!]!
}
type Query {
  node(id: ID!): Node
  posts: [Post!]!
  search(term: String!): [Node]!
}
"""

USER = Object(
    "User",
    USER_T,
    fields=(
        Field("name", STRING, var_name="it.name"),
        Field("email", STRING.wrap(OPTIONAL), var_name="it.email"),
    ),
    satisfies=("Node",),
)

POST = Object(
    "Post",
    POST_T,
    fields=(
        Field("title", STRING, var_name="it.title_value"),
        Field("author", USER_T.wrap(OPTIONAL)),
        Field("tags", STRING.wrap(LIST), var_name="it.tags"),
        Field("wordCount", INT, method_name="it.word_count", no_err=True),
        Field(
            "related",
            POST_T.wrap(LIST),
            method_name="it.related",
            args=(Argument("first", INT.wrap(OPTIONAL)),),
        ),
    ),
    satisfies=("Node",),
)

QUERY = Object(
    "Query",
    QUERY_T,
    fields=(
        Field("node", NODE_T.wrap(OPTIONAL), args=(Argument("id", ID),)),
        Field("posts", POST_T.wrap(LIST)),
        Field(
            "search",
            NODE_T.wrap(LIST, OPTIONAL),
            args=(Argument("term", STRING),),
        ),
    ),
)


def blog_model(**overrides: Any) -> SchemaModel:
    params: dict[str, Any] = {
        "objects": (QUERY, POST, USER),
        "namespace": "blog",
        "schema_raw": BLOG_SCHEMA,
    }
    params.update(overrides)
    return SchemaModel(**params)


def load_blog(model: SchemaModel | None = None) -> dict[str, Any]:
    """Generate and execute the blog module."""
    source = generate(model or blog_model())
    return load_generated(source, Post=Post, User=User)


BLOG_JSON = {
    "namespace": "blog",
    "imports": [{"alias": "models", "path": "app.models"}],
    "schema": BLOG_SCHEMA,
    "objects": [
        {
            "name": "Post",
            "type": {"name": "models.Post", "graphql_name": "Post"},
            "satisfies": ["Node"],
            "fields": [
                {
                    "graphql_name": "title",
                    "var_name": "it.title",
                    "type": {"name": "str", "graphql_name": "String", "basic": True},
                },
                {
                    "graphql_name": "tags",
                    "args": [
                        {"name": "first", "type": {"name": "int", "graphql_name": "Int", "basic": True, "modifiers": ["OPTIONAL"]}},
                    ],
                    "type": {
                        "name": "str",
                        "graphql_name": "String",
                        "basic": True,
                        "modifiers": ["OPTIONAL", "LIST", "OPTIONAL"],
                    },
                },
                {
                    "graphql_name": "words",
                    "method_name": "it.word_count",
                    "no_err": True,
                    "type": {"name": "int", "graphql_name": "Int", "basic": True},
                },
            ],
        },
    ],
}
